# This project was developed with assistance from AI tools.
"""Compliance report REST endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas.compliance import ComplianceAlertListResponse, ComplianceReport, CountryRule
from ..schemas.workflow import CandidateRequest
from ..services.compliance.checks import generate_compliance_alerts
from ..services.workflow import WorkflowEngine, get_workflow_engine

router = APIRouter()


@router.post("/report", response_model=ComplianceReport)
async def compliance_report(
    body: CandidateRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> ComplianceReport:
    """Scored compliance report against the candidate's destination rules."""
    return engine.evaluate_compliance(body.candidate)


@router.post("/alerts", response_model=ComplianceAlertListResponse)
async def compliance_alerts(
    body: CandidateRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> ComplianceAlertListResponse:
    report = engine.evaluate_compliance(body.candidate)
    return ComplianceAlertListResponse(data=generate_compliance_alerts(report))


@router.get("/countries", response_model=list[str])
async def list_countries(
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> list[str]:
    """Destination countries with specific rules (others use the default)."""
    return engine.country_rules.countries()


@router.get("/countries/{country}", response_model=CountryRule)
async def get_country_rule(
    country: str,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> CountryRule:
    if country not in engine.country_rules:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No rule configured for {country}",
        )
    return engine.country_rules.get(country)
