"""Tests for the session orchestrator."""

import asyncio

import pytest

from cforce.config.constants import (
    CONTEXT_PREFIX,
    NO_CONTEXT_MARKER,
    ChatRole,
    LogSeverity,
    Page,
    PipelineKind,
    RunStatus,
)
from cforce.config.message import (
    CHAT_ERROR_FALLBACK,
    ERROR_MESSAGES,
    EXPORT_MESSAGES,
    RUN_DETAIL_MESSAGES,
    RUN_START_MESSAGES,
    RUN_SUCCESS_MESSAGES,
)
from cforce.core.exceptions import GatewayError
from cforce.orchestrator import IntelOrchestrator
from cforce.services.pipelines import ScanResult
from tests.fakes import IP_TRACE_PAYLOAD, OSINT_PAYLOAD, SCAN_PAYLOAD, FakeGateway, dumps


def _messages(orchestrator):
    return [e.message for e in orchestrator.log.entries()]


@pytest.mark.asyncio
async def test_scan_success(orchestrator, gateway):
    gateway.responses.append(dumps(SCAN_PAYLOAD))
    state = await orchestrator.run(PipelineKind.SCAN, "example.com")

    assert state.status == RunStatus.SUCCEEDED
    assert isinstance(orchestrator.results[PipelineKind.SCAN], ScanResult)
    assert state.result is orchestrator.results[PipelineKind.SCAN]
    assert state.result.vulnerabilities == []
    assert state.progress == 0
    assert _messages(orchestrator) == [
        RUN_START_MESSAGES[PipelineKind.SCAN].format(target="example.com"),
        RUN_DETAIL_MESSAGES[PipelineKind.SCAN],
        RUN_SUCCESS_MESSAGES[PipelineKind.SCAN],
    ]
    severities = [e.severity for e in orchestrator.log.entries()]
    assert severities == [LogSeverity.WARNING, LogSeverity.INFO, LogSeverity.SUCCESS]

    view = orchestrator.view(PipelineKind.SCAN)
    assert view["target"] == "example.com"
    assert view["server_ip"] == "93.184.216.34"
    assert view["vulnerabilities"] == []


@pytest.mark.asyncio
async def test_target_is_trimmed(orchestrator, gateway):
    gateway.responses.append(dumps(SCAN_PAYLOAD))
    state = await orchestrator.run(PipelineKind.SCAN, "  example.com \n")
    assert state.target == "example.com"
    assert "Target: example.com\n" in gateway.calls[0][0]


@pytest.mark.asyncio
async def test_malformed_output_keeps_previous_result(orchestrator, gateway):
    gateway.responses.extend([dumps(IP_TRACE_PAYLOAD), "I cannot comply"])
    await orchestrator.run(PipelineKind.IP_TRACE, "Iceland")
    previous = orchestrator.results[PipelineKind.IP_TRACE]

    state = await orchestrator.run(PipelineKind.IP_TRACE, "Palestine")

    assert state.status == RunStatus.FAILED
    assert state.error == ERROR_MESSAGES["parse_failure"]
    assert orchestrator.results[PipelineKind.IP_TRACE] is previous
    errors = [e for e in orchestrator.log.entries() if e.severity == LogSeverity.ERROR]
    assert [e.message for e in errors] == [ERROR_MESSAGES["parse_failure"]]
    assert _messages(orchestrator)[0] == RUN_START_MESSAGES[PipelineKind.IP_TRACE].format(
        target="Palestine"
    )


@pytest.mark.asyncio
async def test_gateway_failure_logs_engine_fatal(orchestrator, gateway):
    gateway.responses.append(GatewayError("network down"))
    state = await orchestrator.run(PipelineKind.OSINT, "example.org")

    assert state.status == RunStatus.FAILED
    assert state.error == ERROR_MESSAGES["engine_fatal"]
    assert orchestrator.results[PipelineKind.OSINT] is None
    assert orchestrator.log.entries()[-1].message == ERROR_MESSAGES["engine_fatal"]
    assert orchestrator.log.entries()[0].severity == LogSeverity.INFO


@pytest.mark.asyncio
async def test_empty_target_is_noop(orchestrator, gateway):
    orchestrator.log.add("previous entry")
    assert await orchestrator.run(PipelineKind.SCAN, "   ") is None
    assert gateway.calls == []
    assert _messages(orchestrator) == ["previous entry"]
    assert orchestrator.runs[PipelineKind.SCAN].status == RunStatus.IDLE


@pytest.mark.asyncio
async def test_duplicate_run_is_noop(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD)], delay=0.1)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)

    first = asyncio.create_task(orchestrator.run(PipelineKind.SCAN, "example.com"))
    await asyncio.sleep(0)
    assert orchestrator.is_running(PipelineKind.SCAN)

    assert await orchestrator.run(PipelineKind.SCAN, "other.com") is None
    state = await first

    assert state.status == RunStatus.SUCCEEDED
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_different_kinds_run_concurrently(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD), dumps(OSINT_PAYLOAD)], delay=0.05)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)

    scan, osint = await asyncio.gather(
        orchestrator.run(PipelineKind.SCAN, "example.com"),
        orchestrator.run(PipelineKind.OSINT, "example.org"),
    )

    assert scan.status == RunStatus.SUCCEEDED
    assert osint.status == RunStatus.SUCCEEDED
    assert orchestrator.results[PipelineKind.SCAN].target == "example.com"
    assert orchestrator.results[PipelineKind.OSINT].target == "example.org"


@pytest.mark.asyncio
async def test_new_run_clears_log(orchestrator, gateway):
    gateway.responses.extend([dumps(SCAN_PAYLOAD), dumps(OSINT_PAYLOAD)])
    await orchestrator.run(PipelineKind.SCAN, "example.com")
    await orchestrator.run(PipelineKind.OSINT, "example.org")

    assert _messages(orchestrator) == [
        RUN_START_MESSAGES[PipelineKind.OSINT].format(target="example.org"),
        RUN_SUCCESS_MESSAGES[PipelineKind.OSINT],
    ]
    assert orchestrator.results[PipelineKind.SCAN] is not None


@pytest.mark.asyncio
async def test_progress_lifecycle(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD)], delay=0.2)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)

    task = asyncio.create_task(orchestrator.run(PipelineKind.SCAN, "example.com"))
    samples = []
    while not task.done():
        samples.append(orchestrator.progress)
        await asyncio.sleep(0.005)

    assert samples[0] == 0 or samples[0] == settings.progress_start
    assert max(samples) == 100
    in_flight = [p for p in samples if 0 < p < 100]
    assert in_flight and in_flight == sorted(in_flight)
    assert all(settings.progress_start <= p <= settings.progress_cap for p in in_flight)
    assert orchestrator.progress == 0


@pytest.mark.asyncio
async def test_view_hidden_while_running(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD), dumps(SCAN_PAYLOAD)], delay=0.05)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)
    await orchestrator.run(PipelineKind.SCAN, "example.com")
    assert orchestrator.view(PipelineKind.SCAN) is not None

    task = asyncio.create_task(orchestrator.run(PipelineKind.SCAN, "example.com"))
    await asyncio.sleep(0)
    assert orchestrator.view(PipelineKind.SCAN) is None
    await task
    assert orchestrator.view(PipelineKind.SCAN) is not None


@pytest.mark.asyncio
async def test_submit_uses_active_page(orchestrator, gateway):
    gateway.responses.append(dumps(OSINT_PAYLOAD))
    orchestrator.select_page(Page.OSINT)
    state = await orchestrator.submit("example.org")
    assert state.kind == PipelineKind.OSINT

    orchestrator.select_page(Page.ASSISTANT)
    assert orchestrator.active_kind is None
    assert orchestrator.progress == 0
    assert await orchestrator.submit("example.org") is None


@pytest.mark.asyncio
async def test_page_switch_does_not_cancel_run(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD)], delay=0.05)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)

    task = asyncio.create_task(orchestrator.run(PipelineKind.SCAN, "example.com"))
    await asyncio.sleep(0)
    orchestrator.select_page(Page.IP_EXPLORER)
    state = await task

    assert state.status == RunStatus.SUCCEEDED
    assert orchestrator.page == Page.IP_EXPLORER


@pytest.mark.asyncio
async def test_chat_appends_two_turns(orchestrator, gateway):
    gateway.responses.extend(["First answer", GatewayError("down")])

    reply = await orchestrator.ask("What is exposed?")
    assert reply.content == "First answer"
    assert len(orchestrator.chat_history) == 2

    reply = await orchestrator.ask("And now?")
    assert reply.content == CHAT_ERROR_FALLBACK
    assert [m.role for m in orchestrator.chat_history] == [
        ChatRole.USER,
        ChatRole.ASSISTANT,
        ChatRole.USER,
        ChatRole.ASSISTANT,
    ]
    assert not orchestrator.chat_pending

    # The second request carries the first exchange as history.
    conversation = gateway.calls[1][0]
    assert [m.content for m in conversation[:2]] == ["What is exposed?", "First answer"]
    assert conversation[-1].content == f"{NO_CONTEXT_MARKER}\n\nUSER_QUERY: And now?"


@pytest.mark.asyncio
async def test_chat_uses_latest_scan_context(orchestrator, gateway):
    gateway.responses.extend([dumps(OSINT_PAYLOAD), dumps(SCAN_PAYLOAD), "ok"])
    await orchestrator.run(PipelineKind.OSINT, "example.org")
    await orchestrator.run(PipelineKind.SCAN, "example.com")

    await orchestrator.ask("Summarize")
    content = gateway.calls[-1][0][-1].content
    assert content.startswith(CONTEXT_PREFIX)
    assert '"serverIp": "93.184.216.34"' in content


@pytest.mark.asyncio
async def test_chat_noop_cases(settings):
    gateway = FakeGateway(["slow answer"], delay=0.05)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)

    assert await orchestrator.ask("   ") is None
    assert orchestrator.chat_history == []

    task = asyncio.create_task(orchestrator.ask("first"))
    await asyncio.sleep(0)
    assert orchestrator.chat_pending
    assert await orchestrator.ask("second") is None
    await task

    assert len(orchestrator.chat_history) == 2
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_export_report(orchestrator, gateway):
    assert orchestrator.export_report(PipelineKind.SCAN) is None

    gateway.responses.append(dumps(SCAN_PAYLOAD))
    await orchestrator.run(PipelineKind.SCAN, "example.com")
    filename, pdf = orchestrator.export_report(PipelineKind.SCAN)

    assert filename == "C-FORCE_REPORT_example_com.pdf"
    assert pdf.startswith(b"%PDF")
    assert _messages(orchestrator)[-2:] == [EXPORT_MESSAGES["started"], EXPORT_MESSAGES["completed"]]


@pytest.mark.asyncio
async def test_background_start_and_close(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD)], delay=5)
    orchestrator = IntelOrchestrator(settings, gateway=gateway)

    state = orchestrator.start(PipelineKind.SCAN, "example.com")
    assert state.running
    assert orchestrator.start(PipelineKind.SCAN, "example.com") is None

    await asyncio.sleep(0)
    await orchestrator.close()
    assert orchestrator.results[PipelineKind.SCAN] is None


def test_snapshot_shape(orchestrator):
    snapshot = orchestrator.snapshot()
    assert snapshot["page"] == Page.SCANNER.value
    assert snapshot["progress"] == 0
    assert set(snapshot["runs"]) == {kind.value for kind in PipelineKind}
    assert snapshot["runs"]["SCAN"]["status"] == RunStatus.IDLE.value
    assert snapshot["log"] == []
    assert snapshot["chat_pending"] is False


@pytest.mark.asyncio
async def test_off_shape_container_still_succeeds(orchestrator, gateway):
    payload = {**SCAN_PAYLOAD, "technicalProfile": {"techStack": "nginx, PHP"}}
    gateway.responses.append(dumps(payload))
    state = await orchestrator.run(PipelineKind.SCAN, "example.com")

    assert state.status == RunStatus.SUCCEEDED
    assert orchestrator.view(PipelineKind.SCAN)["tech_stack"] == ["nginx, PHP"]


@pytest.mark.asyncio
async def test_export_after_failed_rerun_keeps_result_target(orchestrator, gateway):
    gateway.responses.extend([dumps(SCAN_PAYLOAD), GatewayError("down")])
    await orchestrator.run(PipelineKind.SCAN, "example.com")
    failed = await orchestrator.run(PipelineKind.SCAN, "evil.org")
    assert failed.status == RunStatus.FAILED

    filename, pdf = orchestrator.export_report(PipelineKind.SCAN)
    assert filename == "C-FORCE_REPORT_example_com.pdf"
    assert orchestrator.view(PipelineKind.SCAN)["target"] == "example.com"
    assert pdf.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_settled_state_accepts_new_action(orchestrator, gateway, settings):
    gateway.responses.extend(["I cannot comply", dumps(OSINT_PAYLOAD)])
    failed = await orchestrator.run(PipelineKind.OSINT, "example.org")

    await asyncio.sleep(settings.progress_reset_delay)
    assert failed.status == RunStatus.FAILED
    assert not failed.running
    assert failed.progress == 0

    state = await orchestrator.run(PipelineKind.OSINT, "example.org")
    assert state.status == RunStatus.SUCCEEDED
    assert orchestrator.runs[PipelineKind.OSINT] is state
