from pydantic import BaseModel, Field
from typing import Optional


class ClientConfig(BaseModel):
    """
    Connection and identity configuration for the volumes client.

    This configuration is loaded from:
    1. Environment variables (IFS_*)
    2. Configuration file (if provided)
    3. Default values (hardcoded)

    Priority: Environment variables > Config file > Defaults
    """

    # Array connection
    endpoint: str = Field(
        default="https://localhost:8080",
        description="Management API endpoint of the storage array"
    )

    verify_ssl: bool = Field(
        default=True,
        description="Verify the array's TLS certificate"
    )

    timeout_sec: int = Field(
        default=30,
        ge=1,
        le=3600,
        description="Default request deadline (seconds)"
    )

    # Identity
    user: str = Field(
        default="",
        description="User the client authenticates as; becomes the owner of created volumes"
    )

    group: str = Field(
        default="",
        description="Group assigned to created volumes (empty to leave the group unset)"
    )

    password: Optional[str] = Field(
        default=None,
        description="Password for basic authentication"
    )

    # Namespace
    volumes_path: str = Field(
        default="/ifs/volumes",
        description="Directory on the array that holds the volumes"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level name used by configure_logging"
    )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load configuration from environment variables.

        Environment variables (IFS_*) override defaults:

        - IFS_ENDPOINT: Management API endpoint
        - IFS_USER: User name
        - IFS_GROUP: Group name
        - IFS_PASSWORD: Password
        - IFS_VOLUMES_PATH: Volumes directory on the array
        - IFS_VERIFY_SSL: Verify TLS certificates (true/false)
        - IFS_TIMEOUT: Request deadline in seconds
        - IFS_LOG_LEVEL: Log level name
        """
        import os

        kwargs = {}

        # Connection
        if "IFS_ENDPOINT" in os.environ:
            kwargs["endpoint"] = os.environ["IFS_ENDPOINT"]
        if "IFS_VERIFY_SSL" in os.environ:
            kwargs["verify_ssl"] = os.environ["IFS_VERIFY_SSL"].lower() == "true"
        if "IFS_TIMEOUT" in os.environ:
            kwargs["timeout_sec"] = int(os.environ["IFS_TIMEOUT"])

        # Identity
        if "IFS_USER" in os.environ:
            kwargs["user"] = os.environ["IFS_USER"]
        if "IFS_GROUP" in os.environ:
            kwargs["group"] = os.environ["IFS_GROUP"]
        if "IFS_PASSWORD" in os.environ:
            kwargs["password"] = os.environ["IFS_PASSWORD"]

        if "IFS_VOLUMES_PATH" in os.environ:
            kwargs["volumes_path"] = os.environ["IFS_VOLUMES_PATH"]
        if "IFS_LOG_LEVEL" in os.environ:
            kwargs["log_level"] = os.environ["IFS_LOG_LEVEL"]

        return cls(**kwargs)

    @classmethod
    def from_file(cls, config_path: str) -> "ClientConfig":
        """
        Load configuration from a YAML or JSON file.

        Supported formats: .yaml, .yml, .json
        """
        import yaml

        with open(config_path, "r") as f:
            if config_path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(f)
            elif config_path.endswith(".json"):
                import json
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported config format: {config_path}")

        return cls(**(data or {}))
