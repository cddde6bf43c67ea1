"""Sample workload chart.

Renders the nginx workload: a namespace selected by the Fargate profile,
a service account bound to an IAM role via IRSA, a deployment, a service
and an ALB ingress handled by the AWS Load Balancer Controller.
"""

from typing import Any

from cdk8s import ApiObject, ApiObjectMetadata, Chart, JsonPatch
from constructs import Construct

from cdk_eks_fargate.models import WorkloadSettings

# Annotation read by the EKS pod identity webhook
ROLE_ARN_ANNOTATION = "eks.amazonaws.com/role-arn"

INGRESS_ANNOTATIONS = {
    "kubernetes.io/ingress.class": "alb",
    "alb.ingress.kubernetes.io/scheme": "internet-facing",
    # Fargate pods have no node port to target, only pod IPs
    "alb.ingress.kubernetes.io/target-type": "ip",
}


class NginxServiceChart(Chart):
    """Kubernetes manifests for the sample nginx workload.

    Attributes:
        workload: The workload settings the manifests were rendered from.

    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        iam_role_arn: str,
        workload: WorkloadSettings,
    ) -> None:
        """Render the workload manifests.

        Args:
            scope: Parent cdk8s construct, usually a ``cdk8s.App``.
            construct_id: Chart id.
            iam_role_arn: ARN of the IAM role the service account assumes.
            workload: Names, image and sizing of the workload.

        """
        super().__init__(scope, construct_id)
        self.workload = workload

        ApiObject(
            self,
            "namespace",
            api_version="v1",
            kind="Namespace",
            metadata=ApiObjectMetadata(name=workload.namespace),
        )

        ApiObject(
            self,
            "service-account",
            api_version="v1",
            kind="ServiceAccount",
            metadata=ApiObjectMetadata(
                name=workload.service_account,
                namespace=workload.namespace,
                annotations={ROLE_ARN_ANNOTATION: iam_role_arn},
            ),
        )

        self._object("deployment", "apps/v1", "Deployment", self._deployment_spec())
        self._object("service", "v1", "Service", self._service_spec())
        self._object("ingress", "networking.k8s.io/v1", "Ingress", self._ingress_spec(), INGRESS_ANNOTATIONS)

    def _object(
        self,
        construct_id: str,
        api_version: str,
        kind: str,
        spec: dict[str, Any],
        annotations: dict[str, str] | None = None,
    ) -> ApiObject:
        obj = ApiObject(
            self,
            construct_id,
            api_version=api_version,
            kind=kind,
            metadata=ApiObjectMetadata(
                name=self._resource_name(kind),
                namespace=self.workload.namespace,
                annotations=annotations,
            ),
        )
        obj.add_json_patch(JsonPatch.add("/spec", spec))
        return obj

    def _resource_name(self, kind: str) -> str:
        if kind == "Ingress":
            return self.workload.ingress_name
        return f"{self.workload.app_label}-{kind.lower()}"

    def _deployment_spec(self) -> dict[str, Any]:
        labels = {"app": self.workload.app_label}
        return {
            "replicas": self.workload.replicas,
            "selector": {"matchLabels": labels},
            "template": {
                "metadata": {"labels": labels},
                "spec": {
                    "serviceAccountName": self.workload.service_account,
                    "containers": [
                        {
                            "name": self.workload.app_label,
                            "image": self.workload.image,
                            "ports": [{"containerPort": self.workload.container_port}],
                            "resources": {"requests": {"cpu": "250m", "memory": "512Mi"}},
                        }
                    ],
                },
            },
        }

    def _service_spec(self) -> dict[str, Any]:
        return {
            "type": "NodePort",
            "selector": {"app": self.workload.app_label},
            "ports": [
                {
                    "port": 80,
                    "targetPort": self.workload.container_port,
                    "protocol": "TCP",
                }
            ],
        }

    def _ingress_spec(self) -> dict[str, Any]:
        return {
            "rules": [
                {
                    "http": {
                        "paths": [
                            {
                                "path": "/",
                                "pathType": "Prefix",
                                "backend": {
                                    "service": {
                                        "name": self._resource_name("Service"),
                                        "port": {"number": 80},
                                    }
                                },
                            }
                        ]
                    }
                }
            ]
        }
