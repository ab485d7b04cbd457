from __future__ import annotations

import os
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram
from prometheus_client.exposition import generate_latest as _generate_latest

# Registry globale pour toutes les métriques
registry = CollectorRegistry()

# Stockage lazy des métriques
_http_requests_total: Optional[Counter] = None
_http_request_duration_seconds: Optional[Histogram] = None
_dependency_updates_total: Optional[Counter] = None


def metrics_enabled() -> bool:
    """Indique si l'exposition des métriques est activée."""
    return (os.getenv("METRICS_ENABLED", "0") or "0").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


def get_http_requests_total() -> Counter:
    global _http_requests_total
    if _http_requests_total is None:
        _http_requests_total = Counter(
            "http_requests_total",
            "Total des requêtes HTTP",
            ["route", "method", "status"],
            registry=registry,
        )
    return _http_requests_total


def get_http_request_duration_seconds() -> Histogram:
    global _http_request_duration_seconds
    if _http_request_duration_seconds is None:
        _http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "Durée des requêtes HTTP",
            ["route", "method"],
            registry=registry,
        )
    return _http_request_duration_seconds


def get_dependency_updates_total() -> Counter:
    global _dependency_updates_total
    if _dependency_updates_total is None:
        _dependency_updates_total = Counter(
            "dependency_updates_total",
            "Mises à jour de prérequis par issue",
            ["outcome"],
            registry=registry,
        )
    return _dependency_updates_total


def record_dependency_update(outcome: str) -> None:
    """``outcome`` : accepted | rejected_cycle | rejected_invalid."""
    if metrics_enabled():
        get_dependency_updates_total().labels(outcome).inc()


def generate_latest() -> bytes:
    """Génère le payload texte des métriques."""
    return _generate_latest(registry)
