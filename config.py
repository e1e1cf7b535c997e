from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    RPC_URL: str | None = Field(default=None, description="Overrides the chain config RPC endpoint")
    CHAIN_ID: int = 1

    # Upper bound for the eth_getCode race in validate_nft_contract (seconds)
    CODE_FETCH_TIMEOUT: float = Field(default=10.0, gt=0)
    RPC_REQUEST_TIMEOUT: int = Field(default=30, gt=0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
