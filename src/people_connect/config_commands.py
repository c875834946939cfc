"""Configuration commands for people connect CLI."""

from cyclopts import App

from people_connect.config import get_config

config_app = App(name="config", help="Manage configuration (store.path, gemini.api_key, gemini.model, gemini.timeout)")

SECRET_KEYS = {"gemini.api_key"}


def _display(key: str, value: object) -> str:
    if key in SECRET_KEYS and value:
        return "********"
    return str(value)


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set a configuration setting.

    Args:
        key: Configuration key
        value: Configuration value
        global_: If True, set in global config. If False, set in local config.
    """
    config = get_config(use_global=global_)
    config.set(key, value)
    scope = "global" if global_ else "local"
    print(f"Set {key} = {_display(key, value)} ({scope})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Unset a configuration setting."""
    config = get_config(use_global=global_)
    config.unset(key)
    scope = "global" if global_ else "local"
    print(f"Unset {key} ({scope})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Get the value of a configuration setting."""
    config = get_config(use_global=global_)
    value = config.get(key)
    if value is None:
        print(f"{key} is not set")
    else:
        print(f"{key} = {_display(key, value)}")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List all configuration settings, with the effective store path."""
    config = get_config(use_global=global_)
    settings = config.list()

    scope = "Global" if global_ else "Configuration"
    print(f"{scope} settings:\n")
    for key, value in settings.items():
        print(f"{key} = {_display(key, value)}")
    print(f"\nStore file: {config.store_path}")
