"""Tests for the intent flow engine facade."""

import pytest

from intent_flow.config import FlowConfig
from intent_flow.constants import NOT_AVAILABLE, Stage
from intent_flow.engine import IntentFlowEngine
from intent_flow.models import FlowGraph, ThreadRecord


class TestIntentFlowEngine:
    """Test suite for IntentFlowEngine.run."""

    @pytest.mark.unit
    def test_empty_run(self):
        report = IntentFlowEngine().run(records=[])

        assert report.graph == FlowGraph()
        assert report.stats.total_flow == 0
        assert report.stats.avg_flow_strength == 0
        assert report.stats.bottleneck_stage_name == NOT_AVAILABLE
        assert report.stats.top_topic_name == NOT_AVAILABLE

    @pytest.mark.unit
    def test_report_scenario(self):
        record = ThreadRecord(
            id="A",
            resolution_status="closed",
            action_pending_status="completed",
            follow_up_required=True,
        )

        report = IntentFlowEngine().run(records=[record])

        assert [node.name for node in report.graph.stages] == [Stage.REPORT]
        assert report.stats.bottleneck_stage_name == "Report"

    @pytest.mark.unit
    def test_runs_are_independent(self, mixed_records, record_factory):
        engine = IntentFlowEngine(config=FlowConfig(top_topics=2))

        first = engine.run(records=mixed_records)
        engine.run(records=[record_factory(resolution_status="escalated")])
        again = engine.run(records=mixed_records)

        assert first == again
        assert first.to_dict() == again.to_dict()

    @pytest.mark.unit
    def test_sharded_engine_matches_unsharded(self, mixed_records):
        sharded = IntentFlowEngine(shard_size=2).run(records=mixed_records)
        single = IntentFlowEngine().run(records=mixed_records)

        assert sharded == single

    @pytest.mark.unit
    def test_api_rows_end_to_end(self, api_thread_rows):
        records = [ThreadRecord.from_dict(data=row) for row in api_thread_rows]

        report = IntentFlowEngine().run(records=records)

        stages = {node.name: node.count for node in report.graph.stages}
        assert stages == {"Resolution": 1, "Escalation": 1, "Update": 1, "Report": 1}
        assert report.stats.top_topic_name == "Billing"
        assert report.stats.total_flow == 8
