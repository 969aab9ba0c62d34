import os
import logging

import yaml

from .defdict import DefDict
from .exception import ConfigException

log = logging.getLogger(__name__)

true_values = ['1', 'true', 'yes', 'on']
false_values = ['0', 'false', 'no', 'off']


def parse_bool(name: str, value: str) -> bool:
    if value.lower() in true_values:
        return True
    if value.lower() in false_values:
        return False
    raise ConfigException(f"Cannot parse {name}={value!r} as boolean")


class Config(DefDict):
    def __init__(self, path: str = None, environ: dict = None):

        super(Config, self).__init__()

        self.path = path

        self._make_default_config()

        if self.path:
            self.load(self.path)

        self.apply_env(os.environ if environ is None else environ)

    def _make_default_config(self):
        self._d = {
            'handler': 'update',
            'response_writer': 'json',
            'omit_header': True,
            'escape_field_names': False,
            'params': dict(),
        }

    def load(self, path: str):
        log.debug(f"load config {path!r}")
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigException(f"YAML error in {path}: {e}")
        except OSError as e:
            raise ConfigException(f"Cannot read config {path!r}: {e}")

        if data is None:
            return

        if not isinstance(data, dict):
            raise ConfigException(f"Config {path!r} must be a mapping, got {type(data).__name__}")

        unknown = set(data) - set(self._d)
        if unknown:
            raise ConfigException(f"Unknown config keys in {path!r}: {', '.join(sorted(unknown))}")

        self._d.update(data)

    def apply_env(self, environ):
        # apply env variables
        if environ.get('SOLUPDATE_HANDLER'):
            self._d['handler'] = environ.get('SOLUPDATE_HANDLER')

        if environ.get('SOLUPDATE_RESPONSE_WRITER'):
            self._d['response_writer'] = environ.get('SOLUPDATE_RESPONSE_WRITER')

        if environ.get('SOLUPDATE_OMIT_HEADER'):
            self._d['omit_header'] = parse_bool('SOLUPDATE_OMIT_HEADER', environ.get('SOLUPDATE_OMIT_HEADER'))

        if environ.get('SOLUPDATE_ESCAPE_FIELD_NAMES'):
            self._d['escape_field_names'] = parse_bool('SOLUPDATE_ESCAPE_FIELD_NAMES',
                                                       environ.get('SOLUPDATE_ESCAPE_FIELD_NAMES'))

    def __repr__(self):
        return f"Config({self.path}) handler: {self['handler']!r}"


def find_config():
    if os.environ.get('SOLUPDATE_CONFIG'):
        return os.environ.get('SOLUPDATE_CONFIG')

    locations = [
        'solupdate.yml',
        os.path.expanduser('~/.config/solupdate.yml'),
        '/etc/solupdate.yml',
    ]

    locations = [ p for p in locations if os.path.exists(p) ]

    if not locations:
        return None

    return locations[0]
