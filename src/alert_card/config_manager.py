import importlib
import os
from colorama import Back

from alert_card.render_config import DEFAULT_RENDER_CONFIG

config = None

#named config setting -> RenderConfig field
RENDER_OVERRIDES = {
    'LOGO_PATH': 'logo_path',
    'FONT_DIR': 'font_dir',
    'TARGET_TIMEZONE': 'target_timezone',
}


def load(config_name: str):
    """Imports and loads a config file from the 'config' directory

    Args:
        config_name (str): The name of the config file to load
    """
    global config
    try:
        config = importlib.import_module(f'alert_card.config.{config_name}')
        print(Back.LIGHTGREEN_EX + f'Success loading config: {config_name}' + Back.RESET)
    except ImportError as e:
        print(Back.LIGHTRED_EX + f'Error loading config: {config_name} from directory. Error: {e}' + Back.RESET)
        available_configs = get_available_configs()
        if available_configs:
            print(f'Available configs: {", ".join(available_configs)}')
        else:
            print('No available configs found. Check the config directory!')
        raise SystemExit(1)
    return config


def get_available_configs():
    """Returns a list of available config files in the 'config' directory

    Returns:
        list: A list of available config files
    """
    config_dir = os.path.join(os.path.dirname(__file__), 'config')
    if not os.path.exists(config_dir):
        print('error in getting config directory!! Are you sure directory: config exists?')
        return []
    return sorted(
        f.replace('.py', '') for f in os.listdir(config_dir)
        if f.endswith('.py') and not f.startswith('__')
    )


def render_config(cfg=None):
    """RenderConfig for the loaded config, defaults for anything it doesn't set"""
    cfg = cfg if cfg is not None else config
    overrides = {
        field: getattr(cfg, setting)
        for setting, field in RENDER_OVERRIDES.items()
        if getattr(cfg, setting, None) is not None
    }
    return DEFAULT_RENDER_CONFIG.with_overrides(**overrides)
