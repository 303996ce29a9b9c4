# What it does: Manages all read/write operations for the `.vit/config` file
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import os
from .repository import get_meta_dir

DEFAULT_USER_NAME = 'Vit User'
DEFAULT_USER_EMAIL = 'user@example.com'
DEFAULT_TIMEZONE = '+0000'

DEFAULT_CONFIG = {
    'core': {
        'repositoryformatversion': '0',
        'filemode': 'true',
        'bare': 'false',
        'logallrefupdates': 'true',
    },
    'user': {
        'name': DEFAULT_USER_NAME,
        'email': DEFAULT_USER_EMAIL,
    },
}

def get_config_path(repo_root):  # Returns the path to the config file within the repository
    return os.path.join(get_meta_dir(repo_root), 'config')

def read_config(repo_root): # Reads and returns the configuration as a ConfigParser object
    config_path = get_config_path(repo_root)
    config = configparser.ConfigParser()
    if os.path.exists(config_path):
        config.read(config_path)
    return config

def write_default_config(repo_root): # Writes the config file created by `vit init`
    config = configparser.ConfigParser()
    config.read_dict(DEFAULT_CONFIG)
    with open(get_config_path(repo_root), 'w') as configfile:
        config.write(configfile)

def get_user_config(repo_root): # Retrieves (user.name, user.email, user.timezone), falling back to the defaults for anything unset
    config = read_config(repo_root)

    user_name = config.get('user', 'name', fallback=DEFAULT_USER_NAME)
    user_email = config.get('user', 'email', fallback=DEFAULT_USER_EMAIL)
    timezone = config.get('user', 'timezone', fallback=DEFAULT_TIMEZONE)

    return user_name, user_email, timezone
