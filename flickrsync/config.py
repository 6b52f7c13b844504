import configparser
import os
from pathlib import Path
from typing import Dict, Optional

from flickrsync.exceptions import ConfigError

# === PATH CONFIGURATION ===
CONFIG_FILE_NAME = ".flickcurl.conf"
CONFIG_SECTION = "flickr"

# === FLICKR ENDPOINTS ===
REST_URL = "https://api.flickr.com/services/rest"
UPLOAD_URL = "https://up.flickr.com/services/upload/"

# flickr.photosets.getPhotos caps per_page at 500
PAGE_SIZE = 500

CREDENTIAL_KEYS = (
    "oauth_client_key",
    "oauth_client_secret",
    "oauth_token",
    "oauth_token_secret",
)

SETUP_HELP = """\
{program}: Configuration file {path} not found.

1. Visit http://www.flickr.com/services/api/keys/ to get an <API Key>
    and <Shared Secret>.

2. Authorize the app for write and delete access and obtain an OAuth
    access token and token secret.

3. Create {path} in this format:
[flickr]
oauth_client_key=<Client key / API Key>
oauth_client_secret=<Client secret / Shared Secret>
oauth_token=<Access token>
oauth_token_secret=<Access token secret>

Deleting photos/videos (-r) needs delete permission given to the app
(add &perms=delete to the authorization URL).
"""


def config_file_path() -> Path:
    """
    ~/.flickcurl.conf, or .flickcurl.conf in the working directory if HOME
    is not set.
    """
    home = os.environ.get("HOME")
    if home:
        return Path(home) / CONFIG_FILE_NAME
    return Path(CONFIG_FILE_NAME)


def load_credentials(path: Optional[Path] = None) -> Dict[str, str]:
    """
    Read the OAuth keys from the [flickr] section of the config file.
    Raises ConfigError if the file or any key is missing.
    """
    path = Path(path) if path else config_file_path()
    if not path.is_file():
        raise ConfigError(f"Configuration file {path} not found.")

    parser = configparser.ConfigParser()
    try:
        parser.read(path)
    except configparser.Error as e:
        raise ConfigError(f"Cannot parse configuration file {path}: {e}") from e

    if not parser.has_section(CONFIG_SECTION):
        raise ConfigError(f"Section [{CONFIG_SECTION}] missing from {path}")

    section = parser[CONFIG_SECTION]
    missing = [key for key in CREDENTIAL_KEYS if not section.get(key)]
    if missing:
        raise ConfigError(f"Missing {', '.join(missing)} in {path}")

    return {key: section[key] for key in CREDENTIAL_KEYS}
