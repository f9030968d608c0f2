"""
Tests for the Trace Logger.

Verifies phase nesting, event parenting and JSON-ready export.
"""

import json

from scrap_rewrite.core.tracer import TraceEventType, TraceLogger, get_tracer, reset_tracer


def test_phase_nesting():
  tracer = TraceLogger()
  root = tracer.start_phase("Root")
  child = tracer.start_phase("Child", "detail")
  tracer.log_mutation("call", "f()", "await f(self)")
  tracer.end_phase()
  tracer.end_phase()

  events = tracer.export()
  assert events[0]["id"] == root and events[0]["parent_id"] is None
  assert events[1]["id"] == child and events[1]["parent_id"] == root
  assert events[1]["metadata"] == {"detail": "detail"}
  assert events[2]["parent_id"] == child
  assert events[2]["description"] == "Rewrote call"
  assert events[3]["parent_id"] == child
  assert events[4]["parent_id"] == root


def test_end_phase_without_start_is_noop():
  tracer = TraceLogger()
  tracer.end_phase()
  assert tracer.export() == []


def test_close_phases_ends_innermost_first():
  tracer = TraceLogger()
  root = tracer.start_phase("Root")
  child = tracer.start_phase("Child")
  tracer.close_phases()
  tracer.close_phases()

  ends = [e["parent_id"] for e in tracer.export() if e["type"] == TraceEventType.PHASE_END]
  assert ends == [child, root]


def test_inspection_and_warning():
  tracer = TraceLogger()
  tracer.log_inspection("a[k] = 1", "skipped", "assignment: dynamic key")
  tracer.log_warning("Parse Error: boom")
  inspection, warning = tracer.export()
  assert inspection["type"] == TraceEventType.INSPECTION
  assert inspection["metadata"]["outcome"] == "skipped"
  assert warning["type"] == TraceEventType.ANALYSIS_WARNING
  assert warning["metadata"] == {"level": "warning"}


def test_export_is_json_serializable():
  tracer = TraceLogger()
  tracer.start_phase("Root")
  tracer.log_mutation("loop_yield", "while (a) {}", "while (a) {...}")
  decoded = json.loads(json.dumps(tracer.export()))
  assert decoded[0]["type"] == "phase_start"


def test_reset_replaces_global():
  first = get_tracer()
  first.start_phase("Root")
  reset_tracer()
  assert get_tracer() is not first
  assert get_tracer().export() == []
