import logging
from typing import List

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .auth import authenticate_user
from .config import get_settings
from .database import Base, engine, get_db
from .errors import TaskBoardError
from .filters import ViewState, derive_categories, filter_tasks

logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

settings = get_settings()

app = FastAPI(title="Taskboard API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.client_urls,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskBoardError)
async def _taskboard_error_handler(request: Request, exc: TaskBoardError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 400 with a readable message."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "; ".join(parts) or "Invalid request."},
    )


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all so a failed request returns an error body instead of a bare 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error."},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


# ============== USER ENDPOINTS ==============

@app.post("/api/users/register", response_model=schemas.Registered, status_code=201)
def register(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    db_user = crud.create_user(db, user.username, user.email, user.password)
    return {"message": "User registered successfully!", "user_id": db_user.id}


@app.post("/api/users/login", response_model=schemas.LoggedIn)
def login(credentials: schemas.LoginRequest, db: Session = Depends(get_db)):
    """Check email/password and hand back the user id used on later calls"""
    user = crud.login(db, credentials.email, credentials.password)
    return {
        "message": "Login successful",
        "user_id": user.id,
        "email": user.email,
        "username": user.username,
    }


# ============== TASK ENDPOINTS (OWNER-SCOPED) ==============

@app.post("/api/todos", response_model=schemas.Task, status_code=201)
def create_task(
    task: schemas.TaskCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(authenticate_user),
):
    """Create a task owned by the caller"""
    return crud.create_task(db, current_user.id, **task.model_dump())


@app.get("/api/todos/{user_id}", response_model=List[schemas.Task])
def read_tasks(
    user_id: str,
    status_filter: schemas.StatusFilter = Query("all", alias="status"),
    search: str = "",
    category: str = "all",
    db: Session = Depends(get_db),
    current_user: models.User = Depends(authenticate_user),
):
    """Get the caller's tasks, optionally narrowed by status/search/category"""
    tasks = crud.list_tasks(db, current_user.id)
    return filter_tasks(tasks, ViewState(status=status_filter, search=search, category=category))


@app.get("/api/todos/{user_id}/categories", response_model=schemas.Categories)
def read_categories(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(authenticate_user),
):
    """Baseline categories plus those in use by the caller"""
    return {"categories": derive_categories(crud.list_tasks(db, current_user.id))}


@app.patch("/api/todos/{task_id}/toggle", response_model=schemas.ToggleResult)
def toggle_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(authenticate_user),
):
    """Flip a task between active and completed (only if the caller owns it)"""
    completed = crud.toggle_task(db, current_user.id, task_id)
    return {"message": "Todo status updated", "completed": completed}


@app.put("/api/todos/{task_id}", response_model=schemas.Task)
def update_task(
    task_id: str,
    task_update: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(authenticate_user),
):
    """Update a task (only if the caller owns it)"""
    return crud.update_task(
        db, current_user.id, task_id, **task_update.model_dump(exclude_unset=True)
    )


@app.delete("/api/todos/{task_id}", response_model=schemas.Message)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(authenticate_user),
):
    """Delete a task (only if the caller owns it)"""
    crud.delete_task(db, current_user.id, task_id)
    return {"message": "Todo deleted successfully"}
