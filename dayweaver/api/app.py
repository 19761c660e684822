"""FastAPI web application for Day Weaver."""

import asyncio
import json
import logging
import os
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response, WebSocket, WebSocketDisconnect, status
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from dayweaver.api.page import INDEX_HTML
from dayweaver.database.database import get_db
from dayweaver.database.repository import TaskRepository
from dayweaver.engine.board import compose_board
from dayweaver.engine.pagination import PaginationController
from dayweaver.engine.suggestions import build_schedule_request
from dayweaver.exceptions import GenerationFailed, StoreUnavailable, TaskNotFound
from dayweaver.integrations.openai_client import OpenAIClient
from dayweaver.integrations.reminders import send_task_reminder
from dayweaver.models.board import BoardView
from dayweaver.models.constants import AVAILABLE_REACTIONS, DEBOUNCE_DELAY_MS, ITEMS_PER_PAGE
from dayweaver.models.forms import TaskForm
from dayweaver.models.schedule import ReminderResult, ScheduleSuggestion
from dayweaver.models.task import Task, TaskUpdate
from dayweaver.services.planner import TaskPlanner

logger = logging.getLogger(__name__)

PAGE_SIZE = int(os.getenv("DAYWEAVER_PAGE_SIZE", str(ITEMS_PER_PAGE)))
DEBOUNCE_DELAY_SECONDS = int(os.getenv("DAYWEAVER_DEBOUNCE_MS", str(DEBOUNCE_DELAY_MS))) / 1000

# Initialize FastAPI app
app = FastAPI(
    title="Day Weaver API",
    description="Plan your day: tasks, deadlines, priorities and AI schedule suggestions",
    version="0.1.0"
)


# Request/response models
class TaskResponse(BaseModel):
    """Response wrapping a single task."""
    task: Task


class TaskListResponse(BaseModel):
    """Response for task listing."""
    tasks: List[Task]
    count: int


class DeleteAllResponse(BaseModel):
    """Response for bulk delete."""
    deleted_count: int


class ReactionRequest(BaseModel):
    """Request body for adding a reaction."""
    emoji: str


class ReminderRequest(BaseModel):
    """Request body for a task reminder."""
    recipient_email: str


# Dependencies
def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_openai_client() -> OpenAIClient:
    return OpenAIClient()


def _get_task_or_404(repository: TaskRepository, task_id: str) -> Task:
    task = repository.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


@app.exception_handler(TaskNotFound)
async def task_not_found_handler(request: Request, exc: TaskNotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.get("/", response_class=HTMLResponse)
async def root():
    """Root endpoint with the board UI."""
    return INDEX_HTML


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/tasks", response_model=TaskListResponse)
def list_tasks(repository: TaskRepository = Depends(get_task_repository)):
    """List all tasks, newest first."""
    tasks = repository.list_all()
    return TaskListResponse(tasks=tasks, count=len(tasks))


@app.get("/tasks/board", response_model=BoardView)
def task_board(
    request: Request,
    q: str = "",
    now: Optional[datetime] = None,
    repository: TaskRepository = Depends(get_task_repository),
):
    """Classified, paginated board.

    Page state comes from the pendingPage / donePage / expiredPage /
    searchPage query parameters; ``q`` is an already committed search term.
    """
    pagination = PaginationController.from_query(request.query_params, page_size=PAGE_SIZE)
    return compose_board(
        repository.list_all(),
        now or datetime.now(),
        pagination,
        search_input=q,
        search_term=q,
    )


@app.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(form: TaskForm, repository: TaskRepository = Depends(get_task_repository)):
    """Create a task from a validated form submission."""
    task = repository.create(form.to_draft())
    return TaskResponse(task=task)


@app.delete("/tasks", response_model=DeleteAllResponse)
def delete_all_tasks(repository: TaskRepository = Depends(get_task_repository)):
    """Delete every task (all or nothing)."""
    return DeleteAllResponse(deleted_count=repository.delete_all())


@app.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, repository: TaskRepository = Depends(get_task_repository)):
    return TaskResponse(task=_get_task_or_404(repository, task_id))


@app.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, update: TaskUpdate, repository: TaskRepository = Depends(get_task_repository)):
    """Partially update a task. Only supplied fields change."""
    return TaskResponse(task=repository.update(task_id, update))


@app.post("/tasks/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(task_id: str, repository: TaskRepository = Depends(get_task_repository)):
    """Flip a task's completion status."""
    task = _get_task_or_404(repository, task_id)
    return TaskResponse(task=repository.update(task_id, TaskUpdate(is_completed=not task.is_completed)))


@app.post("/tasks/{task_id}/reactions", response_model=TaskResponse)
def react_to_task(task_id: str, body: ReactionRequest, repository: TaskRepository = Depends(get_task_repository)):
    """Increment an emoji reaction on a task."""
    if body.emoji not in AVAILABLE_REACTIONS:
        raise HTTPException(status_code=400, detail=f"Unsupported reaction {body.emoji}")
    task = _get_task_or_404(repository, task_id)
    reactions = dict(task.reactions)
    reactions[body.emoji] = reactions.get(body.emoji, 0) + 1
    return TaskResponse(task=repository.update(task_id, TaskUpdate(reactions=reactions)))


@app.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, repository: TaskRepository = Depends(get_task_repository)):
    if not repository.delete(task_id):
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/tasks/{task_id}/remind", response_model=ReminderResult)
def remind_task(task_id: str, body: ReminderRequest, repository: TaskRepository = Depends(get_task_repository)):
    """Queue a (simulated) reminder for a task."""
    task = _get_task_or_404(repository, task_id)
    return send_task_reminder(task.text, task.deadline, body.recipient_email)


@app.post("/schedule", response_model=ScheduleSuggestion)
def suggest_schedule(
    repository: TaskRepository = Depends(get_task_repository),
    openai_client: OpenAIClient = Depends(get_openai_client),
):
    """Ask the AI for an optimized daily schedule of pending tasks."""
    items = build_schedule_request(repository.list_all(), datetime.now())
    if not items:
        raise HTTPException(status_code=400, detail="No pending tasks available. Add a task first.")
    try:
        return openai_client.generate_daily_schedule(items)
    except GenerationFailed as e:
        raise HTTPException(status_code=502, detail=f"Failed to generate schedule: {str(e)}")


# ---------- live board ----------

# Actions that touch the debounce timer run on the event loop; the rest hit the store
LOOP_ACTIONS = ("input", "page")


def _text_field(message: dict, key: str) -> str:
    value = message.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string")
    return value


def _dispatch(planner: TaskPlanner, message: dict) -> None:
    """Apply one board action sent by the client.

    Raises:
        ValueError: If a field has the wrong type
        ValidationError: If a submitted task form is invalid
    """
    action = message.get("action")
    if action == "input":
        planner.set_search_input(_text_field(message, "value"))
    elif action == "page":
        planner.change_page(_text_field(message, "list"), message.get("page"))
    elif action == "add":
        planner.add_task(TaskForm.model_validate(message.get("task") or {}))
    elif action == "update":
        planner.update_task(_text_field(message, "id"), TaskForm.model_validate(message.get("task") or {}))
    elif action == "toggle":
        planner.toggle_complete(_text_field(message, "id"))
    elif action == "react":
        planner.add_reaction(_text_field(message, "id"), _text_field(message, "emoji"))
    elif action == "delete":
        planner.delete_task(_text_field(message, "id"))
    elif action == "delete_all":
        planner.delete_all()
    elif action == "reload":
        planner.load()
    else:
        planner.notify("Unknown Action", f"Unsupported action {action!r}.", destructive=True)


async def _stop_task(task: asyncio.Task) -> None:
    """Cancel a background task and log anything it raised."""
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        logger.warning(f"Board push task failed: {type(e).__name__}: {str(e)}")


@app.websocket("/ws/board")
async def board_socket(websocket: WebSocket, db: Session = Depends(get_db)):
    """Live board session.

    Each client message is one action; the server answers with the updated
    board. Debounced search commits push an extra board when they fire.
    Store calls run in the threadpool so one slow database round trip does
    not stall other sessions or the debounce timers.
    """
    await websocket.accept()
    planner = TaskPlanner(TaskRepository(db), page_size=PAGE_SIZE, debounce_delay=DEBOUNCE_DELAY_SECONDS)
    commits: asyncio.Queue = asyncio.Queue()
    planner.add_commit_listener(commits.put_nowait)
    # Held while an action is applied and while a board is sent
    session_lock = asyncio.Lock()

    async def send_board():
        board = planner.board()
        await websocket.send_json({
            "type": "board",
            "board": board.model_dump(mode="json"),
            "notifications": [n.model_dump(mode="json") for n in planner.drain_notifications()],
        })

    async def push_commits():
        while True:
            await commits.get()
            async with session_lock:
                await send_board()

    await run_in_threadpool(planner.load)
    await send_board()
    pusher = asyncio.create_task(push_commits())
    try:
        while True:
            raw = await websocket.receive_text()
            async with session_lock:
                try:
                    message = json.loads(raw)
                    if not isinstance(message, dict):
                        raise ValueError("message must be a JSON object")
                    if message.get("action") in LOOP_ACTIONS:
                        _dispatch(planner, message)
                    else:
                        await run_in_threadpool(_dispatch, planner, message)
                except ValidationError as e:
                    first = e.errors()[0]
                    planner.notify("Invalid Task", first.get("msg", "Invalid task data."), destructive=True)
                except ValueError:
                    planner.notify("Invalid Message", "Could not read the request.", destructive=True)
                # Commits made while handling this message are covered by the reply
                while not commits.empty():
                    commits.get_nowait()
                await send_board()
    except WebSocketDisconnect:
        logger.debug("Board socket disconnected")
    finally:
        planner.close()
        await _stop_task(pusher)
