"""
Default settings for vCloud Director requests
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_TIMEOUT = 40
DEFAULT_TASK_TIMEOUT = 300
DEFAULT_POLL_INTERVAL = 5
DEFAULT_ACCEPT = "application/*+xml"


class InvokerSettings(BaseSettings):
    """Timeouts and TLS behaviour shared by a batch of invocations.

    Unset fields are read from VCD_API_TIMEOUT, VCD_TASK_TIMEOUT,
    VCD_POLL_INTERVAL and VCD_SKIP_CERT_CHECK.
    """

    model_config = SettingsConfigDict(
        env_prefix="VCD_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    api_timeout: float = Field(
        default=DEFAULT_API_TIMEOUT,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    task_timeout: float = Field(
        default=DEFAULT_TASK_TIMEOUT,
        ge=0,
        description="Total time to wait for a task (seconds).",
    )
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Pause between task polls (seconds).",
    )
    skip_cert_check: bool = Field(
        default=False,
        description="Skip TLS certificate validation.",
    )
