"""cdk-eks-fargate: EKS on Fargate declared with the AWS CDK.

This package declares an EKS cluster running on Fargate, the AWS Load
Balancer Controller and a sample nginx workload bound to an IAM role
through IRSA.

Example usage:
    from cdk_eks_fargate import build_app, load_settings

    app, stack = build_app(load_settings(cluster_name="demo"))
    app.synth()
"""

__version__ = "0.3.0"

from cdk_eks_fargate.app import build_app, synth
from cdk_eks_fargate.cli import cli
from cdk_eks_fargate.config import load_settings
from cdk_eks_fargate.exceptions import (
    CdkEksFargateError,
    ClusterConnectionError,
    ConfigurationError,
    WorkloadNotFoundError,
)
from cdk_eks_fargate.load_balancer_controller import AwsLoadBalancerController
from cdk_eks_fargate.models import EndpointAccess, ProxySettings, StackSettings, WorkloadSettings
from cdk_eks_fargate.stack import CdkEksFargateStack

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # App
    "build_app",
    "synth",
    "load_settings",
    # Constructs
    "AwsLoadBalancerController",
    "CdkEksFargateStack",
    # Models
    "EndpointAccess",
    "ProxySettings",
    "StackSettings",
    "WorkloadSettings",
    # Exceptions
    "CdkEksFargateError",
    "ClusterConnectionError",
    "ConfigurationError",
    "WorkloadNotFoundError",
]
