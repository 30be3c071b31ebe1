"""Tests for the intelligence pipelines."""

import pytest

from cforce.config.constants import ModelTool, PipelineKind, ResponseFormat
from cforce.core.exceptions import GatewayError, ParseError, PipelineError
from cforce.services.pipelines import (
    IpExplorerPipeline,
    OsintPipeline,
    ScannerPipeline,
    ScanResult,
    build_pipelines,
)
from tests.fakes import SCAN_PAYLOAD, FakeGateway, dumps


def test_build_pipelines_one_per_kind(settings):
    pipelines = build_pipelines(settings, FakeGateway())
    assert set(pipelines) == set(PipelineKind)
    assert isinstance(pipelines[PipelineKind.SCAN], ScannerPipeline)
    assert isinstance(pipelines[PipelineKind.OSINT], OsintPipeline)
    assert isinstance(pipelines[PipelineKind.IP_TRACE], IpExplorerPipeline)


@pytest.mark.asyncio
async def test_run_success(settings):
    gateway = FakeGateway([dumps(SCAN_PAYLOAD)])
    result = await ScannerPipeline(settings, gateway).run("example.com")

    assert isinstance(result, ScanResult)
    assert result.target == "example.com"

    assert len(gateway.calls) == 1
    prompt, config = gateway.calls[0]
    assert "Target: example.com" in prompt
    assert config.response_format == ResponseFormat.JSON
    assert ModelTool.WEB_SEARCH in config.tools
    assert config.model == settings.pipeline_model
    assert config.thinking_budget == settings.pipeline_thinking_budget


@pytest.mark.asyncio
async def test_gateway_failure_becomes_pipeline_error(settings):
    gateway = FakeGateway([GatewayError("boom")])
    with pytest.raises(PipelineError) as exc_info:
        await OsintPipeline(settings, gateway).run("example.org")

    error = exc_info.value
    assert error.kind == PipelineKind.OSINT
    assert isinstance(error.__cause__, GatewayError)
    assert not error.is_parse_failure


@pytest.mark.asyncio
async def test_malformed_output_becomes_pipeline_error(settings):
    gateway = FakeGateway(["I cannot comply"])
    with pytest.raises(PipelineError) as exc_info:
        await IpExplorerPipeline(settings, gateway).run("Palestine")

    error = exc_info.value
    assert error.kind == PipelineKind.IP_TRACE
    assert isinstance(error.__cause__, ParseError)
    assert error.is_parse_failure


@pytest.mark.asyncio
async def test_no_retry_on_failure(settings):
    gateway = FakeGateway([GatewayError("boom"), dumps(SCAN_PAYLOAD)])
    with pytest.raises(PipelineError):
        await ScannerPipeline(settings, gateway).run("example.com")
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_web_search_can_be_disabled(settings):
    settings.pipeline_web_search = False
    gateway = FakeGateway([dumps(SCAN_PAYLOAD)])
    await ScannerPipeline(settings, gateway).run("example.com")
    assert gateway.calls[0][1].tools == frozenset()
