"""Pytest configuration and fixtures."""

import json
import sys

import pytest
from loguru import logger

from intent_flow.models import ThreadRecord


# Restore the default loguru sink; the CLI replaces it on every invocation
@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


# Sample record factory
@pytest.fixture
def record_factory():
    """Factory for creating thread records with sensible defaults."""
    counter = {"next": 0}

    def create_record(**kwargs) -> ThreadRecord:
        counter["next"] += 1
        defaults = {
            "id": f"THR-{counter['next']:04d}",
            "topic_label": "Billing",
        }
        return ThreadRecord(**{**defaults, **kwargs})

    return create_record


# Records covering every classification rule
@pytest.fixture
def mixed_records(record_factory) -> list[ThreadRecord]:
    return [
        record_factory(
            topic_label="Billing",
            resolution_status="closed",
            action_pending_status="completed",
            follow_up_required=True,
        ),
        record_factory(topic_label="Billing", resolution_status="closed"),
        record_factory(topic_label="Billing", resolution_status="escalated"),
        record_factory(
            topic_label="Login",
            resolution_status="open",
            action_pending_status="completed",
        ),
        record_factory(
            topic_label="Login",
            resolution_status="in_progress",
            action_pending_status="in_progress",
        ),
        record_factory(
            topic_label="Shipping",
            resolution_status="in_progress",
            action_pending_status="pending",
        ),
        record_factory(
            topic_label="Shipping",
            resolution_status="open",
            action_pending_status="pending",
        ),
        record_factory(
            topic_label="",
            resolution_status="open",
            action_pending_status="pending",
            action_pending_from="customer",
        ),
        record_factory(topic_label="Refunds"),
    ]


# Thread rows in the dashboard API format
@pytest.fixture
def api_thread_rows() -> list[dict]:
    return [
        {
            "thread_id": "T-100",
            "dominant_cluster_name": "Billing",
            "resolution_status": "closed",
            "action_pending_status": "completed",
            "action_pending_from": "company",
            "escalation_count": 0,
            "follow_up_required": False,
            "next_action_suggestion": "Send invoice summary",
            "priority": "P2",
        },
        {
            "thread_id": "T-101",
            "dominant_cluster_name": "Billing",
            "resolution_status": "escalated",
            "action_pending_status": "pending",
            "action_pending_from": "company",
            "escalation_count": 2,
            "follow_up_required": True,
            "next_action_suggestion": "",
        },
        {
            "thread_id": "T-102",
            "dominant_cluster_name": "Account Access",
            "resolution_status": "in_progress",
            "action_pending_status": "in_progress",
            "action_pending_from": "company",
            "escalation_count": 0,
            "follow_up_required": False,
            "next_action_suggestion": "",
        },
        {
            "thread_id": "T-103",
            "dominant_cluster_name": "",
            "resolution_status": "open",
            "action_pending_status": "pending",
            "action_pending_from": "customer",
            "escalation_count": 0,
            "follow_up_required": False,
            "next_action_suggestion": "",
        },
    ]


@pytest.fixture
def records_json_file(tmp_path, api_thread_rows):
    path = tmp_path / "threads.json"
    path.write_text(json.dumps(api_thread_rows))
    return path
