"""AWS Load Balancer Controller construct.

Creates the controller's Kubernetes service account (with an IRSA-bound
IAM role created by ``aws_eks``), grants it the controller policy and
installs the controller from the eks-charts Helm repository.
"""

from typing import Any

import aws_cdk as cdk
from aws_cdk import aws_eks as eks
from constructs import Construct
from icecream import ic

from cdk_eks_fargate.policies import load_balancer_controller_statements

CONTROLLER_NAME = "aws-load-balancer-controller"
CONTROLLER_NAMESPACE = "kube-system"
CHART_REPOSITORY = "https://aws.github.io/eks-charts"


class AwsLoadBalancerController(Construct):
    """Deploys the AWS Load Balancer Controller onto an EKS cluster.

    Attributes:
        service_account: The controller's service account.
        chart: The Helm chart installing the controller.

    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        cluster: eks.ICluster,
        chart_version: str | None = None,
    ) -> None:
        """Initialize the controller on ``cluster``.

        Args:
            scope: Parent construct.
            construct_id: Construct id.
            cluster: Cluster to install the controller on.
            chart_version: Helm chart version to pin. Latest when None.

        """
        super().__init__(scope, construct_id)

        self.service_account: eks.ServiceAccount = cluster.add_service_account(
            CONTROLLER_NAME,
            name=CONTROLLER_NAME,
            namespace=CONTROLLER_NAMESPACE,
        )
        for statement in load_balancer_controller_statements():
            self.service_account.add_to_principal_policy(statement)

        values = self.helm_values(cluster, region=cdk.Stack.of(self).region)
        ic(values)

        self.chart: eks.HelmChart = cluster.add_helm_chart(
            CONTROLLER_NAME,
            chart=CONTROLLER_NAME,
            repository=CHART_REPOSITORY,
            namespace=CONTROLLER_NAMESPACE,
            version=chart_version,
            values=values,
        )
        # The chart reuses the service account instead of creating its own
        self.chart.node.add_dependency(self.service_account)

    @staticmethod
    def helm_values(cluster: eks.ICluster, *, region: str) -> dict[str, Any]:
        """Build the Helm values for the controller chart.

        Fargate has no instance metadata service, so region and VPC id
        must be passed explicitly.

        Args:
            cluster: The target cluster.
            region: The region the cluster runs in.

        Returns:
            Helm values mapping.

        """
        return {
            "clusterName": cluster.cluster_name,
            "region": region,
            "vpcId": cluster.vpc.vpc_id,
            "serviceAccount": {
                "create": False,
                "name": CONTROLLER_NAME,
            },
        }
