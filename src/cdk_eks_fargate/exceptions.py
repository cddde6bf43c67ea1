"""Custom exceptions for cdk-eks-fargate.

This module defines the exception hierarchy used throughout the application
to provide meaningful error messages and proper error handling.
"""


class CdkEksFargateError(Exception):
    """Base exception for all cdk-eks-fargate errors.

    All custom exceptions in this package inherit from this class,
    allowing the CLI to catch them with a single except clause.
    """

    pass


class ConfigurationError(CdkEksFargateError):
    """Raised when stack settings cannot be loaded or are invalid.

    This can occur when:
    - The configuration file does not exist or is not valid YAML
    - The file contains unknown keys
    - A value has the wrong type or an unsupported choice
    - A Kubernetes name is not a valid DNS subdomain
    """

    pass


class ClusterConnectionError(CdkEksFargateError):
    """Raised when connection to the EKS cluster fails.

    This can occur when:
    - The kubeconfig is invalid or missing
    - The cluster endpoint is unreachable (e.g. private endpoint access)
    - Authentication fails
    """

    pass


class WorkloadNotFoundError(CdkEksFargateError):
    """Raised when the sample workload is not deployed in the cluster.

    This typically means the stack has not been deployed yet, or the
    workload namespace differs from the one in the configuration.
    """

    pass
