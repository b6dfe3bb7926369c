"""Catalog of context fields available to templates at save time."""

from opsflow_core.types import EntityType

# Always present in a run's context
STANDARD_CONTEXT_FIELDS: list[str] = [
    "trigger",
    "trigger.type",
    "trigger.event_type",
    "trigger.entity_type",
    "trigger.entity_id",
    "trigger.data",
    "contact",
    "opportunity",
    "task",
    "project",
    "company",
    "steps",
    "organization_id",
    "triggered_by_user_id",
    "triggered_at",
    "loop",
    "loop.index",
    "loop.item",
    "loop.collection_length",
]

# Entity schema fields, keyed by the entity a workflow is triggered for
ENTITY_FIELDS: dict[EntityType, list[str]] = {
    EntityType.CONTACT: [
        "contact.id",
        "contact.first_name",
        "contact.last_name",
        "contact.email",
        "contact.phone",
        "contact.company_id",
        "contact.lead_status",
        "contact.pipeline_stage",
    ],
    EntityType.TASK: [
        "task.id",
        "task.title",
        "task.description",
        "task.status",
        "task.priority",
        "task.assignee_id",
        "task.project_id",
        "task.due_date",
    ],
    EntityType.OPPORTUNITY: [
        "opportunity.id",
        "opportunity.name",
        "opportunity.value",
        "opportunity.status",
        "opportunity.company_id",
    ],
    EntityType.PROJECT: [
        "project.id",
        "project.name",
        "project.description",
        "project.status",
        "project.owner_id",
        "project.company_id",
    ],
}


def build_context_fields_list(entity_type: EntityType | str | None = None) -> list[str]:
    """Build the available-fields list for a workflow.

    Args:
        entity_type: Entity the workflow is triggered for, if any

    Returns:
        Standard fields plus the entity's schema fields
    """
    fields = list(STANDARD_CONTEXT_FIELDS)

    if entity_type is None:
        return fields

    try:
        entity = EntityType(entity_type)
    except ValueError:
        return fields

    fields.extend(ENTITY_FIELDS.get(entity, []))
    return fields
