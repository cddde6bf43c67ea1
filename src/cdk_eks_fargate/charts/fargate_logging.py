"""Fargate logging chart.

EKS Fargate runs a built-in Fluent Bit log router. It is switched on by
the ``aws-observability`` namespace and configured through the
``aws-logging`` ConfigMap in that namespace.
"""

from cdk8s import ApiObject, ApiObjectMetadata, Chart, JsonPatch
from constructs import Construct

OBSERVABILITY_NAMESPACE = "aws-observability"
LOGGING_CONFIG_MAP = "aws-logging"
DEFAULT_LOG_GROUP = "fluent-bit-cloudwatch"


def render_output_conf(region: str, log_group: str = DEFAULT_LOG_GROUP) -> str:
    """Render the Fluent Bit ``[OUTPUT]`` section for CloudWatch Logs.

    Args:
        region: Region of the log group. May be a CDK token.
        log_group: CloudWatch log group name.

    Returns:
        The ``output.conf`` contents.

    """
    return "\n".join(
        [
            "[OUTPUT]",
            "    Name cloudwatch_logs",
            "    Match *",
            f"    region {region}",
            f"    log_group_name {log_group}",
            "    log_stream_prefix from-fluent-bit-",
            "    auto_create_group true",
            "",
        ]
    )


class FargateLoggingChart(Chart):
    """Enables CloudWatch logging for pods running on Fargate."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        region: str,
        log_group: str = DEFAULT_LOG_GROUP,
    ) -> None:
        super().__init__(scope, construct_id)

        ApiObject(
            self,
            "namespace",
            api_version="v1",
            kind="Namespace",
            metadata=ApiObjectMetadata(
                name=OBSERVABILITY_NAMESPACE,
                labels={"aws-observability": "enabled"},
            ),
        )

        config_map = ApiObject(
            self,
            "config-map",
            api_version="v1",
            kind="ConfigMap",
            metadata=ApiObjectMetadata(name=LOGGING_CONFIG_MAP, namespace=OBSERVABILITY_NAMESPACE),
        )
        config_map.add_json_patch(JsonPatch.add("/data", {"output.conf": render_output_conf(region, log_group)}))
