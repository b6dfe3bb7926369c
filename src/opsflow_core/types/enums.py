"""Shared enumerations for Opsflow."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class EntityType(str, Enum):
    """Entity a workflow is triggered for."""

    CONTACT = "contact"
    TASK = "task"
    OPPORTUNITY = "opportunity"
    PROJECT = "project"
    COMPANY = "company"


class TriggerType(str, Enum):
    """What starts a workflow run."""

    EVENT = "event"
    SCHEDULE = "schedule"
    MANUAL = "manual"
    WEBHOOK = "webhook"


class StepType(str, Enum):
    """Workflow step type."""

    ACTION = "action"
    CONDITION = "condition"
    DELAY = "delay"
    LOOP = "loop"


class ActionType(str, Enum):
    """Action a step performs."""

    SEND_EMAIL = "send_email"
    SEND_NOTIFICATION = "send_notification"
    SEND_PUSH = "send_push"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    CREATE_CONTACT = "create_contact"
    UPDATE_CONTACT = "update_contact"
    ADD_TAG = "add_tag"
    REMOVE_TAG = "remove_tag"
    UPDATE_OPPORTUNITY = "update_opportunity"
    CREATE_PROJECT = "create_project"
    AI_GENERATE = "ai_generate"
    AI_CATEGORIZE = "ai_categorize"
    AI_SUMMARIZE = "ai_summarize"
    WEBHOOK_CALL = "webhook_call"
    CREATE_ACTIVITY = "create_activity"
    SEND_SLACK = "send_slack"


class ConditionOperator(str, Enum):
    """Comparison used by condition steps."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    IN = "in"
    NOT_IN = "not_in"
