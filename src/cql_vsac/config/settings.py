import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from cql_vsac.models.vsac_models import CodeSystemType
from cql_vsac.services.code_service import VSAC_FHIR_URL_TEMPLATE, VSAC_SVS_URL_TEMPLATE


class Settings(BaseSettings):
    # Find .env file relative to project root, not current working directory
    model_config = SettingsConfigDict(
        env_file=os.path.join(Path(__file__).parent.parent.parent.parent, ".env"),
        case_sensitive=False,
        extra="ignore"
    )

    # VSAC Configuration
    umls_api_key: Optional[str] = None
    vsac_use_fhir: bool = False
    vsac_use_default_url: bool = True
    vsac_svs_url: str = VSAC_SVS_URL_TEMPLATE
    vsac_fhir_url: str = VSAC_FHIR_URL_TEMPLATE
    svs_code_system_type: CodeSystemType = CodeSystemType.URL

    # Request timeout in seconds; unset means wait indefinitely
    vsac_request_timeout: Optional[float] = None

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
