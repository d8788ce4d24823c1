import kopf
import logging
import kwork.handlers.manifestwork as manifestwork
import kwork.handlers.probes as probes
from kwork.types.settings import Settings
from kwork.resources import ManifestWork
from kwork.sensors import init_metrics_server, SensorDelegate, PrometheusMonitor
from kubernetes_asyncio import config
from kubernetes_asyncio.client import CustomObjectsApi
from kubernetes_asyncio.client.api_client import ApiClient


@kopf.on.startup()
async def setup(
    settings: kopf.OperatorSettings, memo: kopf.Memo, logger: logging.Logger, **kwargs
):
    # In-cluster config first (production), then local kubeconfig (development)
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        logger.info("In-cluster config not found, trying local kubeconfig")
        try:
            await config.load_kube_config()
            logger.info("Loaded local Kubernetes configuration")
        except config.ConfigException as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise

    memo.conf = Settings()

    memo.api_client = ApiClient()
    memo.work_store = ManifestWork(CustomObjectsApi(memo.api_client), memo.conf)
    logger.info(
        f"Tracking {memo.conf.work_plural}.{memo.conf.work_api_group}/{memo.conf.work_api_version}"
    )

    sensor_delegate = SensorDelegate()
    sensor_delegate.add(PrometheusMonitor())
    memo.sensor = sensor_delegate

    try:
        init_metrics_server()
    except Exception as e:
        logger.error(f"Failed to start metrics server: {e}")
        logger.warning("Continuing without metrics server")

    # Status writes are cheap but conflict-prone; keep concurrency modest
    settings.batching.worker_limit = 4

    settings.posting.enabled = True
    settings.posting.level = logging.WARNING


@kopf.on.cleanup()
async def cleanup(memo: kopf.Memo, logger: logging.Logger, **kwargs):
    logger.info("Shutting down work agent...")

    api_client = getattr(memo, "api_client", None)
    if api_client:
        await api_client.close()
        logger.info("Kubernetes API client closed")

    logger.info("Work agent shutdown complete")


__all__ = [
    "manifestwork",
    "probes",
]
