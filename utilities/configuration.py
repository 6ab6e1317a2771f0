import os
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from domain.exceptions import StorageConfigurationException
from models.storage_config import QuickstartConfig, StorageConfig
from utilities.logger import get_logger

logger = get_logger(__name__)


class ConfigurationKey:
    AccountName = 'AZURE_STORAGE_ACCOUNT_NAME'
    AccountKey = 'AZURE_STORAGE_ACCOUNT_KEY'
    ConnectionString = 'AZURE_STORAGE_CONNECTION_STRING'
    EndpointSuffix = 'AZURE_STORAGE_ENDPOINT_SUFFIX'
    ContainerName = 'QUICKSTART_CONTAINER_NAME'


def parse_connection_string(
    connection_string: str
) -> Dict[str, str]:
    '''
    Split a storage connection string into its settings, e.g.
    'AccountName=x;AccountKey=y' -> {'AccountName': 'x', 'AccountKey': 'y'}
    '''

    settings = dict()
    for segment in connection_string.split(';'):
        if not segment.strip():
            continue

        # Account keys are base64 and may end in '='
        key, _, value = segment.partition('=')
        settings[key.strip()] = value.strip()

    return settings


def get_storage_config(
    environ: Optional[Dict[str, str]] = None
) -> StorageConfig:
    environ = environ if environ is not None else os.environ

    account_name = environ.get(ConfigurationKey.AccountName)
    account_key = environ.get(ConfigurationKey.AccountKey)
    connection_string = environ.get(ConfigurationKey.ConnectionString)

    values = dict()

    if connection_string:
        logger.info('Using storage connection string from environment')
        settings = parse_connection_string(connection_string)

        account_name = account_name or settings.get('AccountName')
        account_key = account_key or settings.get('AccountKey')
        values['connection_string'] = connection_string

        if settings.get('DefaultEndpointsProtocol'):
            values['endpoint_protocol'] = settings.get('DefaultEndpointsProtocol')
        if settings.get('EndpointSuffix'):
            values['endpoint_suffix'] = settings.get('EndpointSuffix')

    if not connection_string:
        if not account_name:
            raise StorageConfigurationException(ConfigurationKey.AccountName)
        if not account_key:
            raise StorageConfigurationException(ConfigurationKey.AccountKey)

    endpoint_suffix = environ.get(ConfigurationKey.EndpointSuffix)
    if endpoint_suffix:
        values['endpoint_suffix'] = endpoint_suffix

    return StorageConfig(
        account_name=account_name,
        account_key=account_key,
        **values)


def get_quickstart_config(
    environ: Optional[Dict[str, str]] = None,
    **overrides
) -> QuickstartConfig:
    environ = environ if environ is not None else os.environ

    values = dict()
    container_name = environ.get(ConfigurationKey.ContainerName)
    if container_name:
        values['container_name'] = container_name

    values.update({
        key: value for key, value in overrides.items()
        if value is not None
    })

    return QuickstartConfig(**values)


def load_configuration(
    env_file: Optional[str] = None,
    **overrides
) -> Tuple[StorageConfig, QuickstartConfig]:
    if env_file is not None:
        logger.info(f'Loading environment file: {env_file}')
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv()

    return (
        get_storage_config(),
        get_quickstart_config(**overrides)
    )
