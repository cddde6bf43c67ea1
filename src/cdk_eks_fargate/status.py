"""Deployed workload inspection.

This module provides the WorkloadStatus class for checking the sample
workload once ``cdk deploy`` has finished: pod phases, the ALB hostname
assigned to the ingress, and an optional HTTP probe through the ALB.
"""

import requests
from icecream import ic
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import MaxRetryError

from cdk_eks_fargate import console
from cdk_eks_fargate.exceptions import ClusterConnectionError, WorkloadNotFoundError
from cdk_eks_fargate.models import WorkloadReport, WorkloadSettings


class WorkloadStatus:
    """Reads the state of the sample workload from the cluster.

    Attributes:
        workload: Settings naming the workload objects.
        context: The kubeconfig context in use.

    """

    def __init__(self, workload: WorkloadSettings, *, context: str | None = None) -> None:
        """Load the kubeconfig for ``context``.

        Args:
            workload: Settings naming the workload objects.
            context: kubeconfig context. The current context when None.

        Raises:
            ClusterConnectionError: If the kubeconfig is invalid or missing.

        """
        self.workload = workload
        try:
            if context is None:
                _, current_context = config.list_kube_config_contexts()
                context = str(current_context["name"])
            config.load_kube_config(context=context)
        except ConfigException as e:
            raise ClusterConnectionError(f"Invalid or missing kubeconfig: {e}") from e
        self.context: str = context
        console.action(f"Working with {console.highlight(context)} cluster")

    def _not_found(self, what: str) -> WorkloadNotFoundError:
        return WorkloadNotFoundError(
            f"{what} not found in namespace '{self.workload.namespace}'. Has the stack been deployed?"
        )

    @staticmethod
    def _api_error(err: ApiException) -> ClusterConnectionError:
        return ClusterConnectionError(f"Kubernetes API request failed: {err.status} {err.reason}")

    def pod_phases(self) -> dict[str, str]:
        """Return the phase of every pod in the workload namespace.

        Raises:
            ClusterConnectionError: If the cluster is unreachable or the API
                rejects the request.
            WorkloadNotFoundError: If the namespace has no pods.

        """
        try:
            pods = client.CoreV1Api().list_namespaced_pod(self.workload.namespace).items
        except MaxRetryError as e:
            raise ClusterConnectionError(f"Failed to connect to the Kubernetes cluster: {e.reason}") from e
        except ApiException as e:
            raise self._api_error(e) from e

        phases = {pod.metadata.name: pod.status.phase for pod in pods}
        ic(phases)
        if not phases:
            raise self._not_found("Pods")
        return phases

    def ingress_hostname(self) -> str | None:
        """Return the ALB hostname of the workload ingress.

        Returns:
            The hostname, or None while the controller is still provisioning.

        Raises:
            ClusterConnectionError: If the cluster is unreachable or the API
                rejects the request.
            WorkloadNotFoundError: If the ingress does not exist.

        """
        try:
            ingress = client.NetworkingV1Api().read_namespaced_ingress(
                self.workload.ingress_name, self.workload.namespace
            )
        except MaxRetryError as e:
            raise ClusterConnectionError(f"Failed to connect to the Kubernetes cluster: {e.reason}") from e
        except ApiException as e:
            if e.status == 404:
                raise self._not_found(f"Ingress '{self.workload.ingress_name}'") from e
            raise self._api_error(e) from e

        load_balancer = ingress.status.load_balancer if ingress.status else None
        entries = (load_balancer.ingress if load_balancer else None) or []
        hostnames = [entry.hostname for entry in entries if entry.hostname]
        ic(hostnames)
        return hostnames[0] if hostnames else None

    @staticmethod
    def probe(hostname: str, timeout: int = 10) -> int | None:
        """Send an HTTP GET to the workload through the ALB.

        Args:
            hostname: ALB hostname.
            timeout: Request timeout in seconds.

        Returns:
            The HTTP status code, or None if the request failed.

        """
        url = f"http://{hostname}/"
        ic(url)
        try:
            response = requests.get(url, timeout=timeout)
        except requests.RequestException as e:
            console.warning(f"Probe of {url} failed: {e}")
            return None
        return response.status_code

    def report(self, *, probe: bool = False) -> WorkloadReport:
        """Collect the workload state.

        Args:
            probe: Whether to send an HTTP request through the ALB.

        Returns:
            A WorkloadReport.

        """
        with console.spinner(f"Inspecting workload in {self.workload.namespace}..."):
            phases = self.pod_phases()
            hostname = self.ingress_hostname()

        http_status = None
        if probe:
            if hostname is None:
                console.warning("Ingress has no load balancer yet, skipping probe")
            else:
                with console.spinner(f"Probing {hostname}..."):
                    http_status = self.probe(hostname)

        return WorkloadReport(
            namespace=self.workload.namespace,
            running_pods=sum(1 for phase in phases.values() if phase == "Running"),
            total_pods=len(phases),
            hostname=hostname,
            http_status=http_status,
        )

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"WorkloadStatus(context={self.context!r}, namespace={self.workload.namespace!r})"
