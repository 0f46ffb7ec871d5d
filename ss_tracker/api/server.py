"""FastAPI server for the health tracker dashboard.

Handlers are ``async def`` so that every command runs on the event loop
that owns the coordinator.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ss_tracker.advisor.gemini_client import HealthAdvisor
from ss_tracker.config import configure_logging, load_settings
from ss_tracker.coordinator import AppCoordinator
from ss_tracker.data_layer.app_store import AppDataStore
from ss_tracker.data_layer.exceptions import (
    MealValidationError,
    TaskNotFoundError,
)
from ss_tracker.data_layer.models import ActivityLevel, AppView, Gender
from ss_tracker.output.formatters import format_dashboard_json

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    age: Optional[int] = None
    height: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, gt=0)
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None


class MealRequest(BaseModel):
    name: str
    calories: Union[int, str]
    protein: Optional[Union[int, str]] = None


class ViewRequest(BaseModel):
    view: AppView


class ChatRequest(BaseModel):
    message: str


def create_app(coordinator: AppCoordinator) -> FastAPI:
    """Build the API around one coordinator."""
    app = FastAPI(title="SS-Tracker API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Local development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/dashboard")
    async def get_dashboard() -> Dict[str, Any]:
        return format_dashboard_json(coordinator.dashboard())

    @app.get("/api/state")
    async def get_state() -> Dict[str, Any]:
        return coordinator.snapshot().to_dict()

    @app.post("/api/login")
    async def login(request: LoginRequest) -> Dict[str, Any]:
        if not coordinator.login(request.email, request.password):
            raise HTTPException(status_code=401, detail="Email and password are required")
        return {"view": coordinator.view.value, "isLoggedIn": coordinator.is_logged_in}

    @app.post("/api/logout")
    async def logout() -> Dict[str, Any]:
        coordinator.logout()
        return {"view": coordinator.view.value, "isLoggedIn": coordinator.is_logged_in}

    @app.put("/api/view")
    async def set_view(request: ViewRequest) -> Dict[str, str]:
        coordinator.set_view(request.view)
        return {"view": coordinator.view.value}

    @app.put("/api/profile")
    async def update_profile(request: ProfileUpdateRequest) -> Dict[str, Any]:
        try:
            profile = coordinator.update_profile(**request.model_dump(exclude_none=True))
        except ValueError as exc:  # includes ProfileValidationError
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return profile.to_dict()

    @app.post("/api/profile/submit")
    async def submit_profile(request: ProfileUpdateRequest) -> Dict[str, Any]:
        try:
            advice = await coordinator.submit_profile(**request.model_dump(exclude_none=True))
        except ValueError as exc:  # includes ProfileValidationError
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {
            "profile": coordinator.profile.to_dict(),
            "advice": advice.to_dict(),
            "view": coordinator.view.value,
        }

    @app.post("/api/meals", status_code=201)
    async def add_meal(request: MealRequest) -> Dict[str, Any]:
        try:
            meal = coordinator.add_meal(request.name, request.calories, request.protein)
        except MealValidationError as exc:
            logger.info("Rejected meal: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {
            "meal": meal.to_dict(),
            "caloriesConsumed": coordinator.aggregator.stats.calories_consumed,
        }

    @app.get("/api/meals")
    async def list_meals() -> List[Dict[str, Any]]:
        return [meal.to_dict() for meal in coordinator.aggregator.meals]

    @app.delete("/api/meals/{meal_id}")
    async def delete_meal(meal_id: str) -> Dict[str, Any]:
        if not coordinator.delete_meal(meal_id):
            raise HTTPException(status_code=404, detail=f"Meal '{meal_id}' not found")
        return {"caloriesConsumed": coordinator.aggregator.stats.calories_consumed}

    @app.post("/api/tasks/{task_id}/toggle")
    async def toggle_task(task_id: str) -> Dict[str, Any]:
        try:
            task = coordinator.toggle_task(task_id)
        except TaskNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"task": task.to_dict(), "totalXp": coordinator.ledger.total_xp()}

    @app.post("/api/water/increment")
    async def add_water() -> Dict[str, int]:
        return {"waterIntake": coordinator.add_water()}

    @app.post("/api/water/decrement")
    async def remove_water() -> Dict[str, int]:
        return {"waterIntake": coordinator.remove_water()}

    @app.post("/api/device/sync")
    async def sync_device() -> Dict[str, Any]:
        stats = await coordinator.connect_device()
        return {"dailyStats": stats.to_dict(), "isWatchConnected": coordinator.is_watch_connected}

    @app.post("/api/chat")
    async def chat(request: ChatRequest) -> Dict[str, Any]:
        reply = await coordinator.send_chat_message(request.message)
        if reply is None:
            raise HTTPException(status_code=422, detail="Message cannot be empty")
        return {
            "reply": reply,
            "history": [message.to_dict() for message in coordinator.chat_history],
        }

    @app.delete("/api/data")
    async def clear_data() -> Dict[str, Any]:
        coordinator.reset()
        return coordinator.snapshot().to_dict()

    return app


def build_app_from_settings(config_path: Optional[str] = None) -> FastAPI:
    settings = load_settings(config_path)
    configure_logging(settings.log_level)
    try:
        advisor = HealthAdvisor.from_env(
            model_id=settings.model_id, timeout_seconds=settings.advice_timeout_seconds
        )
    except ValueError as exc:
        logger.warning("AI coach disabled: %s", exc)
        advisor = None
    coordinator = AppCoordinator(
        AppDataStore(settings.data_dir),
        advisor,
        device_sync_delay=settings.device_sync_delay_seconds,
    )
    return create_app(coordinator)


if __name__ == "__main__":
    uvicorn.run(build_app_from_settings(), host="0.0.0.0", port=8000)
