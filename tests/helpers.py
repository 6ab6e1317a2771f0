from types import SimpleNamespace

from azure.core.exceptions import HttpResponseError

from models.storage_config import QuickstartConfig, StorageConfig

ACCOUNT_URL = 'https://quickstartaccount.blob.core.windows.net'


class TestHelper:
    def get_storage_config(self, **kwargs) -> StorageConfig:
        values = {
            'account_name': 'quickstartaccount',
            'account_key': 'a2V5LXZhbHVl'
        }
        return StorageConfig(**(values | kwargs))

    def get_quickstart_config(self, **kwargs) -> QuickstartConfig:
        values = {
            'interactive': False
        }
        return QuickstartConfig(**(values | kwargs))

    def get_blob_properties(self, name: str, size: int = 12):
        return SimpleNamespace(name=name, size=size)

    def get_blob_url(self, container_name: str, blob_name: str) -> str:
        return f'{ACCOUNT_URL}/{container_name}/{blob_name}'

    def get_service_error(
        self,
        status_code: int = 403,
        error_code: str = 'AuthorizationFailure'
    ) -> HttpResponseError:
        error = HttpResponseError(message='Service request failed')
        error.status_code = status_code
        error.error_code = error_code
        return error
