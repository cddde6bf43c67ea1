"""Stack settings loading and validation.

Settings are merged from, in increasing precedence: built-in defaults,
the ``CDK_DEFAULT_ACCOUNT``/``CDK_DEFAULT_REGION`` environment variables
set by the cdk toolkit, an optional YAML file and explicit overrides.
"""

import dataclasses
import os
import re
from pathlib import Path
from typing import Any

import yaml
from icecream import ic

from cdk_eks_fargate.exceptions import ConfigurationError
from cdk_eks_fargate.models import EndpointAccess, ProxySettings, StackSettings, WorkloadSettings

DEFAULT_CONFIG_FILE = "cdk-eks-fargate.yaml"

# Kubernetes DNS subdomain name validation (RFC 1123)
_DNS_SUBDOMAIN_MAX_LENGTH = 253
_DNS_SUBDOMAIN_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$"

_VPC_ID_PATTERN = re.compile(r"^vpc-[0-9a-f]{8,17}$")

_SECTIONS = ("proxy", "workload")

_STRING_SETTINGS = (
    "stack_id",
    "account",
    "region",
    "cluster_name",
    "vpc_id",
    "load_balancer_controller_chart_version",
)


def validate_k8s_name(name: str) -> bool | str:
    """Validate a Kubernetes resource name (DNS subdomain).

    Args:
        name: The name to validate.

    Returns:
        True if valid, or an error message string if invalid.

    """
    if not name:
        return "Name cannot be empty"
    if len(name) > _DNS_SUBDOMAIN_MAX_LENGTH:
        return f"Name must be {_DNS_SUBDOMAIN_MAX_LENGTH} characters or less"
    if not re.match(_DNS_SUBDOMAIN_PATTERN, name):
        return "Name must consist of lowercase alphanumeric characters, '-' or '.', and must start and end with an alphanumeric character"
    return True


def validate_vpc_id(vpc_id: str) -> bool | str:
    """Validate an EC2 VPC id. An empty value means "create a new VPC"."""
    if not vpc_id or _VPC_ID_PATTERN.match(vpc_id):
        return True
    return f"'{vpc_id}' is not a valid VPC id (expected vpc-xxxxxxxx)"


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML settings file.

    Raises:
        ConfigurationError: If the file is missing, malformed or not a mapping.

    """
    try:
        with path.open() as stream:
            data = yaml.safe_load(stream)
    except FileNotFoundError as err:
        raise ConfigurationError(f"Config file '{path}' does not exist") from err
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Config file '{path}' contains malformed YAML: {err}") from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must contain a YAML mapping")
    return data


def _field_names(cls: type) -> set[str]:
    return {f.name for f in dataclasses.fields(cls)} if dataclasses.is_dataclass(cls) else set(cls._fields)


def _check_keys(section: str, values: dict[str, Any], cls: type) -> None:
    unknown = sorted(set(values) - _field_names(cls))
    if unknown:
        raise ConfigurationError(f"Unknown {section} setting(s): {', '.join(unknown)}")


def _build_workload(values: dict[str, Any]) -> WorkloadSettings:
    _check_keys("workload", values, WorkloadSettings)
    try:
        workload = WorkloadSettings(**values)
    except TypeError as err:
        raise ConfigurationError(f"Invalid workload settings: {err}") from err

    for label in ("namespace", "service_account", "ingress_name"):
        result = validate_k8s_name(getattr(workload, label))
        if result is not True:
            raise ConfigurationError(f"Invalid workload {label} '{getattr(workload, label)}': {result}")

    if not isinstance(workload.replicas, int) or workload.replicas < 1:
        raise ConfigurationError(f"Workload replicas must be a positive integer, got {workload.replicas!r}")
    if not isinstance(workload.container_port, int) or not 0 < workload.container_port < 65536:
        raise ConfigurationError(f"Invalid workload container_port {workload.container_port!r}")
    return workload


def _build_settings(values: dict[str, Any]) -> StackSettings:
    _check_keys("stack", values, StackSettings)
    values = dict(values)

    for key in _STRING_SETTINGS:
        value = values.get(key)
        if value is None or isinstance(value, str):
            continue
        # unquoted account ids and chart versions load as numbers
        if isinstance(value, int) and not isinstance(value, bool):
            values[key] = str(value)
        else:
            raise ConfigurationError(f"The '{key}' setting must be a string, got {value!r}")

    for section in _SECTIONS:
        if values.get(section) is not None and not isinstance(values[section], dict):
            raise ConfigurationError(f"The '{section}' setting must be a mapping")

    proxy_values = values.pop("proxy", None) or {}
    _check_keys("proxy", proxy_values, ProxySettings)
    values["proxy"] = ProxySettings(**proxy_values)
    values["workload"] = _build_workload(values.pop("workload", None) or {})

    if "endpoint_access" in values:
        try:
            values["endpoint_access"] = EndpointAccess(values["endpoint_access"])
        except ValueError as err:
            choices = ", ".join(mode.value for mode in EndpointAccess)
            raise ConfigurationError(
                f"Invalid endpoint_access '{values['endpoint_access']}' (expected one of: {choices})"
            ) from err

    vpc_id = values.get("vpc_id")
    if vpc_id is not None:
        result = validate_vpc_id(vpc_id)
        if result is not True:
            raise ConfigurationError(result)

    settings = StackSettings(**values)
    if settings.vpc_id is not None and not settings.has_environment:
        raise ConfigurationError(
            "vpc_id requires account and region to look up the VPC "
            "(set them in the settings file or via CDK_DEFAULT_ACCOUNT/CDK_DEFAULT_REGION)"
        )
    return settings


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> StackSettings:
    """Load stack settings.

    Args:
        config_path: YAML file to read. When None, ``cdk-eks-fargate.yaml``
            in the working directory is used if it exists.
        **overrides: Top-level settings taking precedence over the file.
            ``None`` values are ignored so unset CLI options fall through.

    Returns:
        The merged StackSettings.

    Raises:
        ConfigurationError: If the file or any value is invalid.

    """
    values: dict[str, Any] = {}

    account = os.environ.get("CDK_DEFAULT_ACCOUNT")
    region = os.environ.get("CDK_DEFAULT_REGION")
    if account:
        values["account"] = account
    if region:
        values["region"] = region

    if config_path is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config_path = DEFAULT_CONFIG_FILE
    if config_path is not None:
        file_values = _read_config_file(Path(config_path))
        ic(file_values)
        values.update(file_values)

    values.update({key: value for key, value in overrides.items() if value is not None})
    ic(values)

    return _build_settings(values)


def settings_to_dict(settings: StackSettings) -> dict[str, Any]:
    """Convert settings to plain YAML-friendly data, dropping unset values."""
    data: dict[str, Any] = {}
    for f in dataclasses.fields(settings):
        value = getattr(settings, f.name)
        if f.name in _SECTIONS:
            section = value._asdict() if f.name == "proxy" else dataclasses.asdict(value)
            section = {key: item for key, item in section.items() if item is not None}
            if section:
                data[f.name] = section
        elif isinstance(value, EndpointAccess):
            data[f.name] = value.value
        elif value is not None:
            data[f.name] = value
    return data


def dump_settings(settings: StackSettings, path: str | Path) -> Path:
    """Write settings to a YAML file that ``load_settings`` can read back.

    Args:
        settings: Settings to write.
        path: Destination file.

    Returns:
        The path written to.

    Raises:
        ConfigurationError: If the file cannot be written.

    """
    path = Path(path)
    try:
        with path.open("w") as stream:
            yaml.safe_dump(settings_to_dict(settings), stream, sort_keys=False)
    except OSError as err:
        raise ConfigurationError(f"Cannot write config file '{path}': {err.strerror}") from err
    return path
