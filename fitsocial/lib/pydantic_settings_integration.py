import logging
from collections.abc import Callable
from sys import modules
from typing import Any, get_type_hints

from pydantic import create_model
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict


def _is_setting_name(name: str) -> bool:
    return name[:1] != '_' and name.isupper()


# noinspection PyDefaultArgument
def pydantic_settings_integration(
    caller_name: str,
    caller_globals: dict[str, Any],
    /,
    config: SettingsConfigDict = SettingsConfigDict(env_file='.env', extra='ignore'),
    name_filter: Callable[[str], bool] = _is_setting_name,
) -> None:
    """
    Turn the UPPER_CASE globals of a module into pydantic settings.
    The module annotations (or the default value types) become the field types,
    values are loaded from the environment and .env, validated,
    and written back into the module globals.
    """
    settings = {k: v for k, v in caller_globals.items() if name_filter(k)}
    if not settings:
        logging.warning('No settings found in %s', caller_name)
        return

    type_hints = get_type_hints(modules[caller_name], settings)

    def field_type(name: str, value: Any) -> Any:
        hint = type_hints.get(name)
        if hint is not None:
            return hint
        return Any if isinstance(value, FieldInfo) else type(value)

    base = type(
        f'{caller_name}_SettingsBase',
        (BaseSettings,),
        {'model_config': config},
    )
    loaded = create_model(
        f'{caller_name}_Settings',
        __base__=base,
        **{name: (field_type(name, value), value) for name, value in settings.items()},  # type: ignore
    )()

    caller_globals.update((name, getattr(loaded, name)) for name in settings)
