"""Tests for prompts.py module."""

from unittest.mock import patch

from cdk_eks_fargate.config import dump_settings, load_settings
from cdk_eks_fargate.models import EndpointAccess, ProxySettings, WorkloadSettings
from cdk_eks_fargate.prompts import _validate_account, _validate_region, collect_settings


class TestCollectSettings:
    """Tests for the interactive settings flow."""

    def test_defaults_accepted(self):
        """Test accepting defaults yields a default-like configuration."""
        with (
            patch("questionary.text") as mock_text,
            patch("questionary.select") as mock_select,
            patch("questionary.confirm") as mock_confirm,
        ):
            mock_text.return_value.unsafe_ask.side_effect = [
                "k8s-app-on-eks-fargate-stack",
                "",
                "",
                "nginx",
                "sa-nginx",
                "api-ingress",
                "nginx:1.25",
                "2",
            ]
            mock_select.return_value.unsafe_ask.return_value = "public"
            mock_confirm.return_value.unsafe_ask.return_value = False

            settings = collect_settings()

        assert settings.cluster_name is None
        assert settings.vpc_id is None
        assert settings.account is None
        assert settings.endpoint_access is EndpointAccess.PUBLIC
        assert settings.proxy == ProxySettings()
        assert settings.workload == WorkloadSettings()

    def test_custom_values_with_proxy(self):
        """Test custom answers including proxy settings."""
        with (
            patch("questionary.text") as mock_text,
            patch("questionary.select") as mock_select,
            patch("questionary.confirm") as mock_confirm,
        ):
            mock_text.return_value.unsafe_ask.side_effect = [
                "shop-stack",
                "shop",
                "vpc-0a1b2c3d",
                "123456789012",
                "eu-west-1",
                "http://proxy:3128",
                "http://proxy:3128",
                "localhost",
                "shop",
                "sa-shop",
                "shop-ingress",
                "nginx:1.27",
                "3",
            ]
            mock_select.return_value.unsafe_ask.return_value = "private"
            mock_confirm.return_value.unsafe_ask.return_value = True

            settings = collect_settings()

        assert settings.stack_id == "shop-stack"
        assert settings.cluster_name == "shop"
        assert settings.vpc_id == "vpc-0a1b2c3d"
        assert settings.account == "123456789012"
        assert settings.region == "eu-west-1"
        assert settings.endpoint_access is EndpointAccess.PRIVATE
        assert settings.proxy.https_proxy == "http://proxy:3128"
        assert settings.proxy.no_proxy == "localhost"
        assert settings.workload.namespace == "shop"
        assert settings.workload.replicas == 3

    def test_existing_vpc_settings_load_back(self, clean_env):
        """Test a file written for an existing VPC passes settings validation."""
        with (
            patch("questionary.text") as mock_text,
            patch("questionary.select") as mock_select,
            patch("questionary.confirm") as mock_confirm,
        ):
            mock_text.return_value.unsafe_ask.side_effect = [
                "k8s-app-on-eks-fargate-stack",
                "",
                "vpc-0a1b2c3d",
                "123456789012",
                "eu-west-1",
                "nginx",
                "sa-nginx",
                "api-ingress",
                "nginx:1.25",
                "2",
            ]
            mock_select.return_value.unsafe_ask.return_value = "public"
            mock_confirm.return_value.unsafe_ask.return_value = False

            settings = collect_settings()

        path = dump_settings(settings, clean_env / "settings.yaml")

        assert load_settings(path) == settings


class TestValidators:
    """Tests for the prompt validators."""

    def test_account(self):
        """Test only 12-digit account ids are accepted."""
        assert _validate_account("123456789012") is True
        assert "12-digit" in _validate_account("12345")
        assert "12-digit" in _validate_account("")

    def test_region(self):
        """Test the region cannot be empty."""
        assert _validate_region("eu-west-1") is True
        assert _validate_region("") == "Region cannot be empty"
