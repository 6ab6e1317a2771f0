import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError

from domain.exceptions import StorageConfigurationException
from utilities.configuration import load_configuration
from utilities.logger import LOG_LEVELS, configure_logging, get_logger
from utilities.provider import ContainerProvider

logger = get_logger(__name__)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Azure Blob storage quick start sample')
    parser.add_argument(
        '--async',
        dest='use_async',
        action='store_true',
        help='Run the sample with the asyncio storage client')
    parser.add_argument(
        '--container',
        dest='container_name',
        default=None,
        help='Container to create, use and delete')
    parser.add_argument(
        '--no-pause',
        dest='interactive',
        action='store_false',
        help="Don't wait for Enter before deleting the sample resources")
    parser.add_argument(
        '--env-file',
        default=None,
        help='Path to a .env file with the storage account settings')
    parser.add_argument(
        '--log-level',
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help='Logging level, e.g. INFO or DEBUG')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = get_parser().parse_args(argv)

    configure_logging(args.log_level)

    try:
        storage_config, quickstart_config = load_configuration(
            env_file=args.env_file,
            container_name=args.container_name,
            interactive=args.interactive)
    except (StorageConfigurationException, ValidationError) as ex:
        logger.error(f'Invalid configuration: {ex}')
        print(str(ex))
        return 2

    service = ContainerProvider.get_service(
        storage_config=storage_config,
        quickstart_config=quickstart_config,
        use_async=args.use_async)

    if args.use_async:
        result = asyncio.run(service.run())
    else:
        result = service.run()

    logger.info(f'Quickstart result: {result.to_dict()}')
    return 0 if result.succeeded else 1


if __name__ == '__main__':
    sys.exit(main())
