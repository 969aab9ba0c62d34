import argparse
import logging
import os
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape as markup_escape

from . import __version__
from .builder import UpdateRequestBuilder
from .config import Config, find_config
from .exception import SolupdateException
from .loader import load_file

log = logging.getLogger(__name__)


def get_args(argv=None):
    parser = argparse.ArgumentParser(description=f'Build XML update request for search server (solupdate {__version__})')
    parser.add_argument('file', help='update description (.json, .yml, .yaml)')
    parser.add_argument('-c', '--config', default=None, help='config file (default: $SOLUPDATE_CONFIG or solupdate.yml)')
    parser.add_argument('--format', choices=['json', 'yaml'], default=None, help='input format (default: by extension)')
    parser.add_argument('--request', default=False, action='store_true', help='show whole request, not only body')
    parser.add_argument('--base-url', default=None, metavar='URL', help='show full URL for server, e.g. http://localhost:8983/solr/core')
    parser.add_argument('-v', '--verbose', default=False, action='store_true')
    return parser.parse_args(argv)


def main(argv=None):
    load_dotenv()

    args = get_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(name)s %(levelname)s: %(message)s')

    console = Console(highlight=False)

    try:
        config = Config(args.config or find_config(), environ=os.environ)
        log.debug(f"{config!r}")
        query = load_file(args.file, format=args.format, config=config)
        request = UpdateRequestBuilder(config=config).build(query)
    except SolupdateException as e:
        Console(stderr=True).print(f"[red]error:[/red] {markup_escape(str(e))}", markup=True, soft_wrap=True)
        return 1

    if not args.request:
        sys.stdout.write(request.raw_data + '\n')
        return 0

    console.print(f"[bold]{request.method}[/bold] {request.get_uri()}", markup=True)
    if args.base_url:
        prepared = request.prepare(args.base_url)
        console.print(prepared.url, markup=False)
    for header in request.headers:
        console.print(header, markup=False)
    console.print()
    console.print(request.raw_data, markup=False, soft_wrap=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
