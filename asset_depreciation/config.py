from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Display (engine itself is currency-agnostic)
    currency_code: str = "PHP"
    currency_symbol: str = "₱"

    # Entry book value may differ from cost - prior depreciation by rounding
    book_value_tolerance: Decimal = Decimal("0.01")

    # Declining balance default: 2x the straight-line rate (double declining)
    default_declining_factor: Decimal = Decimal("2")


settings = Settings()
