import pytest
from httpx import AsyncClient
from starlette import status


async def test_list_users(client: AsyncClient):
    r = await client.get('/api/users')
    assert r.status_code == status.HTTP_200_OK, r.text
    assert r.headers['Content-Type'] == 'application/json'

    users = r.json()
    assert [u['id'] for u in users] == ['user1', 'user2', 'user3', 'user4']
    assert users[0]['fitnessGoals'] == ['Weight Loss', 'Strength Training']
    assert users[0]['isVerified'] is True


async def test_get_user(client: AsyncClient):
    r = await client.get('/api/users/user3')
    assert r.status_code == status.HTTP_200_OK, r.text
    user = r.json()
    assert user['name'] == 'Emma Thompson'
    assert user['followers'] == ['user1', 'user2']
    assert user['following'] == ['user1', 'user2', 'user4']


async def test_get_user_not_found(client: AsyncClient):
    r = await client.get('/api/users/nobody')
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {'detail': 'User nobody not found'}


async def test_follow_unfollow_flow(client: AsyncClient):
    # Follow user4 as user1
    r = await client.post('/api/users/user4/follow', json={'followerId': 'user1'})
    assert r.status_code == status.HTTP_200_OK, r.text
    assert r.json() == {'success': True}

    # Both sides are updated
    assert (await client.get('/api/users/user1')).json()['following'] == ['user2', 'user3', 'user4']
    assert (await client.get('/api/users/user4')).json()['followers'] == ['user3', 'user1']

    # Following again does not duplicate
    r = await client.post('/api/users/user4/follow', json={'followerId': 'user1'})
    assert r.status_code == status.HTTP_200_OK, r.text
    assert (await client.get('/api/users/user4')).json()['followers'] == ['user3', 'user1']

    # Unfollow
    r = await client.post('/api/users/user4/unfollow', json={'followerId': 'user1'})
    assert r.status_code == status.HTTP_200_OK, r.text
    assert (await client.get('/api/users/user1')).json()['following'] == ['user2', 'user3']
    assert (await client.get('/api/users/user4')).json()['followers'] == ['user3']

    # Unfollowing again is a no-op
    r = await client.post('/api/users/user4/unfollow', json={'followerId': 'user1'})
    assert r.status_code == status.HTTP_200_OK, r.text


@pytest.mark.parametrize('action', ['follow', 'unfollow'])
@pytest.mark.parametrize('body', [{}, {'followerId': ''}, None])
async def test_follower_id_required(client: AsyncClient, action, body):
    r = await client.post(f'/api/users/user2/{action}', json=body)
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {'detail': 'Follower ID is required'}


@pytest.mark.parametrize(
    ('target', 'follower', 'missing'),
    [
        ('nobody', 'user1', 'nobody'),
        ('user1', 'nobody', 'nobody'),
    ],
)
async def test_follow_unknown_user(client: AsyncClient, target, follower, missing):
    r = await client.post(f'/api/users/{target}/follow', json={'followerId': follower})
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {'detail': f'User {missing} not found'}


async def test_self_follow(client: AsyncClient):
    r = await client.post('/api/users/user1/follow', json={'followerId': 'user1'})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {'detail': 'Users cannot follow themselves'}
