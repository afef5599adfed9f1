"""
FastAPI Main Application - Mobile Tester
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from .catalog.scenarios import default_suite, scenario_names, select_scenarios
from .config import settings
from .models import ScenarioGroup
from .runner.orchestrator import SuiteOrchestrator

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Appium-driven onboarding and login suite",
    version="1.0.0"
)

# Run storage (in-memory, one process, one device)
runs = {}


class RunRequest(BaseModel):
    scenarios: Optional[List[str]] = None  # If None, run the whole suite
    include_home_checks: bool = True


class RunResponse(BaseModel):
    run_id: str
    status: str
    message: str


def create_orchestrator(run_id: str) -> SuiteOrchestrator:
    return SuiteOrchestrator(settings, run_id=run_id)


def execute_run(run_id: str, groups: List[ScenarioGroup]):
    """Run the suite and store its outcome on the run record."""
    run = runs[run_id]
    try:
        outcome = create_orchestrator(run_id).run(groups)
        run["outcome"] = outcome.model_dump(mode="json")
        run["exit_code"] = outcome.exit_code
        run["report_path"] = outcome.report_path
        run["error"] = outcome.error
        run["status"] = "aborted" if outcome.aborted else "completed"
    except Exception as e:
        logger.exception("Run %s crashed", run_id)
        run["status"] = "error"
        run["error"] = str(e)
    run["ended_at"] = datetime.now().isoformat()


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.get("/api/scenarios")
async def list_scenarios():
    return {"scenarios": scenario_names(default_suite(settings))}


@app.post("/api/runs", response_model=RunResponse)
async def start_run(request: RunRequest, background_tasks: BackgroundTasks):
    """
    Start a suite run in the background.
    Only one run may use the device at a time.
    """
    active = [r["id"] for r in runs.values() if r["status"] == "running"]
    if active:
        raise HTTPException(status_code=409, detail=f"Run {active[0]} is still in progress")

    groups = default_suite(settings, include_home=request.include_home_checks)
    if request.scenarios:
        try:
            groups = select_scenarios(groups, request.scenarios)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    run_id = str(uuid.uuid4())[:8]
    runs[run_id] = {
        "id": run_id,
        "status": "running",
        "scenarios": scenario_names(groups),
        "created_at": datetime.now().isoformat(),
        "ended_at": None,
        "outcome": None,
        "exit_code": None,
        "report_path": None,
        "error": None,
    }
    background_tasks.add_task(execute_run, run_id, groups)

    return RunResponse(
        run_id=run_id,
        status="running",
        message=f"Started {len(runs[run_id]['scenarios'])} scenarios"
    )


@app.get("/api/runs/{run_id}")
async def get_run(run_id: str):
    if run_id not in runs:
        raise HTTPException(status_code=404, detail="Run not found")
    return runs[run_id]


@app.get("/api/reports")
async def list_reports():
    """List the CSV reports on disk, newest first."""
    reports = []
    for file in sorted(settings.REPORTS_DIR.glob("TestReport_*.csv"), reverse=True):
        reports.append({
            "name": file.name,
            "size": file.stat().st_size,
        })
    return {"reports": reports}


@app.get("/api/reports/{filename}")
async def get_report_file(filename: str):
    file_path = settings.REPORTS_DIR / filename
    if file_path.parent != settings.REPORTS_DIR or file_path.suffix != ".csv" or not file_path.is_file():
        raise HTTPException(status_code=404, detail="Report not found")
    return FileResponse(str(file_path), media_type="text/csv")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
