"""cdk8s charts subpackage.

This package contains the Kubernetes manifests added to the cluster
through ``Cluster.add_cdk8s_chart``.
"""

from cdk_eks_fargate.charts.fargate_logging import FargateLoggingChart
from cdk_eks_fargate.charts.nginx_service import NginxServiceChart

__all__ = [
    "FargateLoggingChart",
    "NginxServiceChart",
]
