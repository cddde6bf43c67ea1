"""Shared test fixtures for cdk-eks-fargate tests."""

from unittest.mock import MagicMock, patch

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from cdk_eks_fargate.models import StackSettings, WorkloadSettings
from cdk_eks_fargate.stack import CdkEksFargateStack


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory without cdk toolkit environment variables."""
    monkeypatch.delenv("CDK_DEFAULT_ACCOUNT", raising=False)
    monkeypatch.delenv("CDK_DEFAULT_REGION", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(scope="module")
def default_stack():
    """A stack declared from default settings."""
    app = cdk.App()
    return CdkEksFargateStack(app, "MyTestStack", settings=StackSettings())


@pytest.fixture(scope="module")
def default_template(default_stack):
    """Synthesized template of the default stack."""
    return Template.from_stack(default_stack)


@pytest.fixture
def workload():
    """Default workload settings."""
    return WorkloadSettings()


@pytest.fixture
def mock_kube_contexts():
    """Mock kubernetes config contexts."""
    with patch("kubernetes.config.list_kube_config_contexts") as mock:
        mock.return_value = ([{"name": "test-context"}], {"name": "test-context"})
        yield mock


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


def _pod(name: str, phase: str) -> MagicMock:
    pod = MagicMock()
    pod.metadata.name = name
    pod.status.phase = phase
    return pod


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api returning two nginx pods."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        api_instance.list_namespaced_pod.return_value.items = [
            _pod("nginx-deployment-1", "Running"),
            _pod("nginx-deployment-2", "Pending"),
        ]
        yield api_instance


@pytest.fixture
def mock_networking_v1_api():
    """Mock NetworkingV1Api returning an ingress with an ALB hostname."""
    with patch("kubernetes.client.NetworkingV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        entry = MagicMock()
        entry.hostname = "k8s-nginx-apiingre-123.eu-west-1.elb.amazonaws.com"
        api_instance.read_namespaced_ingress.return_value.status.load_balancer.ingress = [entry]
        yield api_instance


@pytest.fixture
def cluster_mocks(mock_kube_contexts, mock_kube_config, mock_core_v1_api, mock_networking_v1_api):
    """Combined fixture for inspecting a workload without cluster access."""
    return {
        "contexts": mock_kube_contexts,
        "config": mock_kube_config,
        "core_api": mock_core_v1_api,
        "networking_api": mock_networking_v1_api,
    }


@pytest.fixture
def sample_config_yaml():
    """Sample settings file content."""
    return """stack_id: demo-stack
account: "123456789012"
region: eu-west-1
cluster_name: demo
vpc_id: vpc-0a1b2c3d4e5f67890
endpoint_access: public-and-private
proxy:
  https_proxy: http://proxy.internal:3128
  no_proxy: localhost,.eks.amazonaws.com
workload:
  namespace: shop
  service_account: sa-shop
  replicas: 3
"""
