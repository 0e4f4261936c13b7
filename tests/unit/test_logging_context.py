"""Unit tests for pipeline logging context."""

import pytest

from article_pipeline.utils.logging import (
    add_pipeline_context,
    clear_pipeline_context,
    get_pipeline_context,
    set_pipeline_context,
)


@pytest.mark.unit
class TestPipelineContext:
    """Test pipeline context helpers."""

    def setup_method(self) -> None:
        clear_pipeline_context()

    def teardown_method(self) -> None:
        clear_pipeline_context()

    def test_context_is_added_to_events(self) -> None:
        set_pipeline_context(article_id=7, stage="research")

        event = add_pipeline_context(None, "info", {"event": "Search started"})

        assert event["article_id"] == 7
        assert event["stage"] == "research"

    def test_explicit_fields_win(self) -> None:
        set_pipeline_context(article_id=7, stage="research")

        event = add_pipeline_context(None, "info", {"event": "x", "article_id": 9})

        assert event["article_id"] == 9

    def test_partial_update_keeps_other_field(self) -> None:
        set_pipeline_context(article_id=3, stage="ingestion")
        set_pipeline_context(stage="enrichment")

        assert get_pipeline_context() == {"article_id": 3, "stage": "enrichment"}

    def test_clear(self) -> None:
        set_pipeline_context(article_id=3, stage="ingestion")
        clear_pipeline_context()

        assert add_pipeline_context(None, "info", {"event": "x"}) == {"event": "x"}
