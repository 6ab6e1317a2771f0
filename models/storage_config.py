import re
from typing import Optional

from pydantic import BaseModel, SecretStr, field_validator, model_validator

CONTAINER_NAME_PATTERN = re.compile(r'[a-z0-9](?!.*--)[a-z0-9-]{1,61}[a-z0-9]')


class StorageConfig(BaseModel):
    account_name: Optional[str] = None
    account_key: Optional[SecretStr] = None
    endpoint_protocol: str = 'https'
    endpoint_suffix: str = 'core.windows.net'
    connection_string: Optional[SecretStr] = None

    @model_validator(mode='after')
    def validate_credentials(self) -> 'StorageConfig':
        # A connection string carries its own credentials (or a SAS token)
        if self.connection_string is not None:
            return self

        if not self.account_name or self.account_key is None:
            raise ValueError(
                'account_name and account_key are required without a connection_string')
        return self

    def get_connection_string(
        self
    ) -> str:
        if self.connection_string is not None:
            return self.connection_string.get_secret_value()

        return (
            f'DefaultEndpointsProtocol={self.endpoint_protocol};'
            f'AccountName={self.account_name};'
            f'AccountKey={self.account_key.get_secret_value()};'
            f'EndpointSuffix={self.endpoint_suffix}'
        )


class QuickstartConfig(BaseModel):
    container_name: str = 'quickstartcontainer'
    file_prefix: str = 'sampleFile'
    file_suffix: str = '.txt'
    content: str = 'Hello Azure!'
    downloaded_file_name: str = 'downloadedFile.txt'
    public_access: Optional[str] = 'container'
    interactive: bool = True

    @field_validator('container_name')
    @classmethod
    def validate_container_name(cls, value: str) -> str:
        # 3-63 chars, lowercase alphanumerics and single hyphens
        if not CONTAINER_NAME_PATTERN.fullmatch(value):
            raise ValueError(f"Invalid container name: '{value}'")
        return value
