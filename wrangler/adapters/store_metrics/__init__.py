"""Connection store metrics adapters."""

from wrangler.adapters.store_metrics.fake import FakeConnectionStoreMetrics
from wrangler.adapters.store_metrics.prometheus import PrometheusConnectionStoreMetrics

__all__ = ["FakeConnectionStoreMetrics", "PrometheusConnectionStoreMetrics"]
