import json
import logging

import yaml

from .config import Config
from .exception import LoadException
from .query import UpdateQuery

log = logging.getLogger(__name__)


def guess_format(path: str) -> str:
    if path.lower().endswith('.yaml') or path.lower().endswith('.yml'):
        return 'yaml'
    # default
    return 'json'


def load_file(path: str, format: str = None, config: Config = None) -> UpdateQuery:

    log.debug(f".. load update from {path!r}")

    if format is None:
        format = guess_format(path)

    try:
        with open(path) as fh:
            if format == 'json':
                data = json.load(fh)
            elif format == 'yaml':
                data = yaml.safe_load(fh)
            else:
                raise LoadException(f'Unknown format: {format!r}')

    except OSError as e:
        raise LoadException(f"Cannot read {path!r}: {e}")
    except json.JSONDecodeError as e:
        raise LoadException(f"JSON error in {path!r}: {e}")
    except yaml.YAMLError as e:
        raise LoadException(f"YAML error in {path!r}: {e}")

    return UpdateQuery.from_dict(data, config=config)
