"""EKS on Fargate stack.

This module provides the CdkEksFargateStack, which declares the cluster,
the AWS Load Balancer Controller, the workload IAM role bound through
IRSA, the Fargate profile with CloudWatch logging, and the workload
manifests.
"""

import aws_cdk as cdk
import cdk8s
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_eks as eks
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from aws_cdk.lambda_layer_kubectl_v31 import KubectlV31Layer
from constructs import Construct
from icecream import ic

from cdk_eks_fargate.charts import FargateLoggingChart, NginxServiceChart
from cdk_eks_fargate.load_balancer_controller import AwsLoadBalancerController
from cdk_eks_fargate.models import StackSettings, WorkloadSettings
from cdk_eks_fargate.policies import fargate_logging_statement

KUBERNETES_VERSION = eks.KubernetesVersion.V1_31

_PRIVATE_SUBNETS = ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS)


class CdkEksFargateStack(cdk.Stack):
    """Stack running a sample workload on an EKS Fargate cluster.

    Attributes:
        settings: The settings the stack was declared from.
        cluster: The Fargate cluster.
        load_balancer_controller: The AWS Load Balancer Controller construct.
        workload_role: IAM role assumed by the workload service account.
        example_bucket: Bucket the workload role is allowed to read.
        workload_profile: Fargate profile for the workload namespace.

    """

    def __init__(self, scope: Construct, construct_id: str, *, settings: StackSettings, **kwargs) -> None:
        if settings.has_environment:
            kwargs.setdefault("env", cdk.Environment(account=settings.account, region=settings.region))
        super().__init__(scope, construct_id, **kwargs)
        self.settings = settings

        masters_role = iam.Role(self, "cluster-master-role", assumed_by=iam.AccountRootPrincipal())

        self.cluster = eks.FargateCluster(
            self,
            "my-cluster",
            version=KUBERNETES_VERSION,
            kubectl_layer=KubectlV31Layer(self, "kubectl-layer"),
            masters_role=masters_role,
            cluster_name=settings.cluster_name,
            output_cluster_name=True,
            endpoint_access=settings.endpoint_access.to_eks(),
            kubectl_environment=settings.proxy.to_environment() or None,
            vpc=self._lookup_vpc(settings.vpc_id),
            vpc_subnets=[_PRIVATE_SUBNETS],
        )

        self.load_balancer_controller = AwsLoadBalancerController(
            self,
            "aws-loadbalancer-controller",
            cluster=self.cluster,
            chart_version=settings.load_balancer_controller_chart_version,
        )

        # The workload itself does not call AWS. The role and bucket show how
        # to hand Fargate pods fine-grained AWS permissions.
        self.workload_role = self._workload_role(settings.workload)
        self.example_bucket = s3.Bucket(
            self,
            "S3BucketToShowGrantPermission",
            encryption=s3.BucketEncryption.KMS_MANAGED,
        )
        self.example_bucket.grant_read(self.workload_role)

        self.workload_profile = self.cluster.add_fargate_profile(
            "customer-app-profile",
            selectors=[eks.Selector(namespace=settings.workload.namespace)],
            subnet_selection=_PRIVATE_SUBNETS,
            vpc=self.cluster.vpc,
        )
        logging_policy = iam.ManagedPolicy(
            self,
            "eks-fargate-logging-iam-policy",
            statements=[fargate_logging_statement()],
        )
        self.workload_profile.pod_execution_role.add_managed_policy(logging_policy)

        cdk8s_app = cdk8s.App()
        logging_chart = self.cluster.add_cdk8s_chart(
            "eks-fargate-logging",
            FargateLoggingChart(cdk8s_app, "eks-fargate-logging-chart", region=self.region),
        )
        logging_chart.node.add_dependency(self.workload_profile)

        workload_chart = self.cluster.add_cdk8s_chart(
            "nginx-app-service",
            NginxServiceChart(
                cdk8s_app,
                "nginx-app-chart",
                iam_role_arn=self.workload_role.role_arn,
                workload=settings.workload,
            ),
        )
        workload_chart.node.add_dependency(self.workload_profile)

        cdk.CfnOutput(self, "WorkloadRoleArn", value=self.workload_role.role_arn)
        cdk.CfnOutput(self, "ExampleBucketName", value=self.example_bucket.bucket_name)

    def _lookup_vpc(self, vpc_id: str | None) -> ec2.IVpc | None:
        """Look up an existing VPC, or return None to let CDK create one.

        The private subnets of an existing VPC must be tagged with
        ``kubernetes.io/role/internal-elb: 1``.
        """
        if vpc_id is None:
            return None
        ic(vpc_id)
        return ec2.Vpc.from_lookup(self, "vpc", vpc_id=vpc_id)

    def _workload_role(self, workload: WorkloadSettings) -> iam.Role:
        """Create the IAM role assumed by the workload service account.

        The issuer URL is only known at deploy time, so the condition keys
        go through CfnJson.
        """
        issuer = self.cluster.cluster_open_id_connect_issuer
        conditions = cdk.CfnJson(
            self,
            "ConditionJson",
            value={
                f"{issuer}:aud": "sts.amazonaws.com",
                f"{issuer}:sub": f"system:serviceaccount:{workload.namespace}:{workload.service_account}",
            },
        )
        principal = iam.FederatedPrincipal(
            self.cluster.open_id_connect_provider.open_id_connect_provider_arn,
            {},
            "sts:AssumeRoleWithWebIdentity",
        ).with_conditions({"StringEquals": conditions})

        return iam.Role(self, "nginx-app-sa-role", assumed_by=principal)
