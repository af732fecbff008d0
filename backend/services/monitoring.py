"""In-process per-model request metrics and performance alerts."""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

QUALITY_THRESHOLD = 0.7
LATENCY_THRESHOLD_MS = 10_000
ERROR_RATE_THRESHOLD = 0.1
ALERT_DEDUP_WINDOW = timedelta(minutes=5)
MAX_ALERTS = 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ModelMetrics:
    model_id: str
    request_count: int = 0
    average_response_time_ms: float = 0.0
    success_rate: float = 1.0
    average_quality_score: float = 0.0
    last_used: datetime = field(default_factory=_now)

    @property
    def status(self) -> str:
        if self.success_rate > 0.9:
            return "healthy"
        if self.success_rate > 0.7:
            return "degraded"
        return "unhealthy"


@dataclass
class PerformanceAlert:
    type: str  # quality | latency | error_rate
    severity: str  # low | medium | high
    message: str
    model_id: str
    timestamp: datetime = field(default_factory=_now)


class ModelMonitor:
    def __init__(self) -> None:
        self._metrics: dict[str, ModelMetrics] = {}
        self._alerts: list[PerformanceAlert] = []

    def record_request(self, model_id: str, response_time_ms: float, success: bool, quality_score: float) -> None:
        m = self._metrics.setdefault(model_id, ModelMetrics(model_id=model_id))
        n = m.request_count
        m.average_response_time_ms = (m.average_response_time_ms * n + response_time_ms) / (n + 1)
        m.success_rate = (m.success_rate * n + (1 if success else 0)) / (n + 1)
        m.average_quality_score = (m.average_quality_score * n + quality_score) / (n + 1)
        m.request_count = n + 1
        m.last_used = _now()
        self._check_alerts(m)

    def metrics(self, model_id: str | None = None) -> list[ModelMetrics]:
        if model_id is not None:
            return [self._metrics.get(model_id, ModelMetrics(model_id=model_id))]
        return list(self._metrics.values())

    def alerts(self, severity: str | None = None) -> list[PerformanceAlert]:
        if severity:
            return [a for a in self._alerts if a.severity == severity]
        return list(self._alerts)

    def clear_alerts(self, model_id: str | None = None) -> None:
        if model_id:
            self._alerts = [a for a in self._alerts if a.model_id != model_id]
        else:
            self._alerts = []

    def reset(self) -> None:
        self._metrics.clear()
        self._alerts = []

    def health(self) -> dict:
        return {
            "models": [
                {
                    "id": m.model_id,
                    "status": m.status,
                    "requests": m.request_count,
                    "quality": round(m.average_quality_score, 2),
                    "latencyMs": round(m.average_response_time_ms),
                }
                for m in self._metrics.values()
            ],
            "alerts": len(self._alerts),
            "timestamp": _now().isoformat(),
        }

    def detailed(self) -> dict:
        return {
            "alerts": [
                {**asdict(a), "timestamp": a.timestamp.isoformat()} for a in self._alerts
            ],
            "modelMetrics": [
                {
                    "id": m.model_id,
                    "requests": m.request_count,
                    "successRate": f"{m.success_rate * 100:.1f}%",
                    "avgQuality": f"{m.average_quality_score:.2f}",
                    "avgLatency": f"{m.average_response_time_ms:.0f}ms",
                    "lastUsed": m.last_used.isoformat(),
                }
                for m in self._metrics.values()
            ],
        }

    def report(self) -> str:
        """Plain-text performance report."""
        all_metrics = list(self._metrics.values())
        total = sum(m.request_count for m in all_metrics)
        if all_metrics:
            avg_quality = sum(m.average_quality_score for m in all_metrics) / len(all_metrics)
            avg_latency = sum(m.average_response_time_ms for m in all_metrics) / len(all_metrics)
        else:
            avg_quality = avg_latency = 0.0

        lines = [
            "# Model Performance Report",
            f"Generated: {_now().isoformat()}",
            "",
            "## Overall Statistics",
            f"- Total Requests: {total}",
            f"- Average Quality Score: {avg_quality:.2f}",
            f"- Average Response Time: {avg_latency:.0f}ms",
            f"- Active Models: {len(all_metrics)}",
            "",
            "## Model Performance",
        ]
        for m in all_metrics:
            lines += [
                f"### {m.model_id}",
                f"- Requests: {m.request_count}",
                f"- Success Rate: {m.success_rate * 100:.1f}%",
                f"- Quality Score: {m.average_quality_score:.2f}",
                f"- Avg Response Time: {m.average_response_time_ms:.0f}ms",
                f"- Last Used: {m.last_used.isoformat()}",
            ]
        lines += ["", "## Active Alerts"]
        if not self._alerts:
            lines.append("No active alerts")
        for a in self._alerts:
            lines.append(f"- [{a.severity.upper()}] {a.message} ({a.model_id})")
        return "\n".join(lines)

    def _check_alerts(self, m: ModelMetrics) -> None:
        if m.average_quality_score < QUALITY_THRESHOLD and m.request_count >= 5:
            self._add_alert(PerformanceAlert(
                type="quality",
                severity="high" if m.average_quality_score < 0.5 else "medium",
                message=f"Quality score below threshold: {m.average_quality_score:.2f}",
                model_id=m.model_id,
            ))
        if m.average_response_time_ms > LATENCY_THRESHOLD_MS:
            self._add_alert(PerformanceAlert(
                type="latency",
                severity="high" if m.average_response_time_ms > 2 * LATENCY_THRESHOLD_MS else "medium",
                message=f"High response time: {m.average_response_time_ms:.0f}ms",
                model_id=m.model_id,
            ))
        if m.success_rate < 1 - ERROR_RATE_THRESHOLD and m.request_count >= 10:
            self._add_alert(PerformanceAlert(
                type="error_rate",
                severity="high" if m.success_rate < 0.8 else "medium",
                message=f"High error rate: {(1 - m.success_rate) * 100:.1f}%",
                model_id=m.model_id,
            ))

    def _add_alert(self, alert: PerformanceAlert) -> None:
        now = _now()
        for existing in self._alerts:
            if (
                existing.type == alert.type
                and existing.model_id == alert.model_id
                and now - existing.timestamp < ALERT_DEDUP_WINDOW
            ):
                return
        logger.warning("Model alert [%s] %s (%s)", alert.severity, alert.message, alert.model_id)
        self._alerts.append(alert)
        if len(self._alerts) > MAX_ALERTS:
            self._alerts = self._alerts[-MAX_ALERTS:]


monitor = ModelMonitor()
