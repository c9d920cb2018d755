from __future__ import annotations

from datetime import datetime

import pytest

from src.training_attendance.training_attendance.attendance.classifier import AttendanceStatusClassifier, TrainingHours
from src.training_attendance.training_attendance.common.messages import MessageCatalog


@pytest.fixture
def fixed_now() -> datetime:
    # A Monday inside the training period
    return datetime(2026, 2, 2, 8, 55, 30)


@pytest.fixture
def messages() -> MessageCatalog:
    return MessageCatalog("en")


@pytest.fixture
def training_hours() -> TrainingHours:
    return TrainingHours.from_config("09:00", "18:00")


@pytest.fixture
def classifier(training_hours) -> AttendanceStatusClassifier:
    return AttendanceStatusClassifier(training_hours)
