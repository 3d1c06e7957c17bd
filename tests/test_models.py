"""Unit tests for data models."""

import pytest

from intent_flow.constants import (
    UNKNOWN_TOPIC,
    ActionPendingStatus,
    NodeKind,
    ResolutionStatus,
)
from intent_flow.models import FlowGraph, FlowLink, FlowNode, ThreadRecord


class TestThreadRecord:
    """Test suite for ThreadRecord default resolution."""

    @pytest.mark.unit
    def test_defaults(self):
        record = ThreadRecord(id="T-1")

        assert record.topic_label == UNKNOWN_TOPIC
        assert record.resolution_status is None
        assert record.action_pending_status is None
        assert record.action_pending_from is None
        assert record.escalation_count == 0
        assert record.follow_up_required is False
        assert record.next_action_suggestion == ""
        assert record.outcome == "open"

    @pytest.mark.unit
    def test_status_strings_become_enums(self):
        record = ThreadRecord(
            id="T-1", resolution_status="closed", action_pending_status="overdue"
        )

        assert record.resolution_status is ResolutionStatus.CLOSED
        assert record.action_pending_status is ActionPendingStatus.OVERDUE
        assert record.outcome == "closed"

    @pytest.mark.unit
    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            ThreadRecord(id="T-1", resolution_status="archived")

    @pytest.mark.unit
    def test_from_dict_api_format(self, api_thread_rows):
        record = ThreadRecord.from_dict(data=api_thread_rows[0])

        assert record.id == "T-100"
        assert record.topic_label == "Billing"
        assert record.resolution_status is ResolutionStatus.CLOSED
        assert record.action_pending_status is ActionPendingStatus.COMPLETED
        assert record.action_pending_from == "company"
        assert record.next_action_suggestion == "Send invoice summary"

    @pytest.mark.unit
    def test_from_dict_short_format_and_empty_values(self):
        record = ThreadRecord.from_dict(
            data={
                "id": "T-9",
                "topic_label": "",
                "resolution_status": "",
                "action_pending_from": "",
                "escalation_count": None,
            }
        )

        assert record.topic_label == UNKNOWN_TOPIC
        assert record.resolution_status is None
        assert record.action_pending_from is None
        assert record.escalation_count == 0

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data",
        [
            {"topic_label": "Billing", "resolution_status": "open"},
            {"id": "", "thread_id": None},
        ],
    )
    def test_from_dict_without_id_rejected(self, data):
        with pytest.raises(ValueError, match="thread_id"):
            ThreadRecord.from_dict(data=data)

    @pytest.mark.unit
    def test_from_dict_null_count_and_flag(self):
        record = ThreadRecord.from_dict(
            data={
                "thread_id": "T-1",
                "escalation_count": None,
                "follow_up_required": None,
            }
        )

        assert record.escalation_count == 0
        assert record.follow_up_required is False

    @pytest.mark.unit
    def test_round_trip_through_dict(self, api_thread_rows):
        record = ThreadRecord.from_dict(data=api_thread_rows[1])

        assert ThreadRecord.from_dict(data=record.to_dict()) == record

    @pytest.mark.unit
    def test_records_are_immutable(self):
        record = ThreadRecord(id="T-1")

        with pytest.raises(AttributeError):
            record.topic_label = "Changed"


class TestFlowGraphModel:
    """Test suite for FlowNode/FlowLink/FlowGraph helpers."""

    @pytest.mark.unit
    def test_node_id(self):
        node = FlowNode(name="Billing", kind=NodeKind.TOPIC, count=3)

        assert node.id == "topic:Billing"
        assert node.to_dict() == {
            "id": "topic:Billing",
            "name": "Billing",
            "kind": "topic",
            "count": 3,
        }

    @pytest.mark.unit
    def test_get_node(self):
        topic = FlowNode(name="Billing", kind=NodeKind.TOPIC, count=1)
        stage = FlowNode(name="Close", kind=NodeKind.STAGE, count=1)
        graph = FlowGraph(
            topics=(topic,),
            stages=(stage,),
            topic_stage_links=(
                FlowLink(source=topic.id, target=stage.id, value=1),
            ),
        )

        assert graph.get_node("stage:Close") == stage
        assert graph.get_node("outcome:closed") is None
        assert graph.nodes == (topic, stage)
        assert not graph.is_empty()

    @pytest.mark.unit
    def test_to_dict_partitions_by_kind(self):
        graph = FlowGraph(
            outcomes=(FlowNode(name="open", kind=NodeKind.OUTCOME, count=2),),
        )

        data = graph.to_dict()

        assert data["topics"] == []
        assert data["stages"] == []
        assert data["outcomes"][0]["id"] == "outcome:open"
        assert data["topic_stage_links"] == []
        assert data["stage_outcome_links"] == []
