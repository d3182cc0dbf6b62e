"""
Entity registry

Every admin page manages one or more entity types. Each type is declared
once here; the HTTP routes, the resource service, the admin client page,
the form modal and the stats panel all read their behavior from the
``EntityConfig`` entries below.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import JSON

from ngo_admin.models import (
    Event, EventRegistration, Subscriber, NewsletterCampaign, VolunteerOpportunity,
    FreelanceGig, Course, LegalCase, Law, Testimonial, VideoLecture,
)
from ngo_admin.schemas.event import EventCreate, EventUpdate, EventResponse
from ngo_admin.schemas.newsletter import (
    SubscriberCreate, SubscriberUpdate, SubscriberResponse,
    CampaignCreate, CampaignUpdate, CampaignResponse,
)
from ngo_admin.schemas.volunteer import (
    VolunteerOpportunityCreate, VolunteerOpportunityUpdate, VolunteerOpportunityResponse,
)
from ngo_admin.schemas.job_guidance import (
    FreelanceGigCreate, FreelanceGigUpdate, FreelanceGigResponse,
    CourseCreate, CourseUpdate, CourseResponse,
)
from ngo_admin.schemas.legal import (
    LegalCaseCreate, LegalCaseUpdate, LegalCaseResponse,
    LawCreate, LawUpdate, LawResponse,
)
from ngo_admin.schemas.testimonial import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from ngo_admin.schemas.lecture import VideoLectureCreate, VideoLectureUpdate, VideoLectureResponse
from ngo_admin.schemas.registration import (
    EventRegistrationCreate, EventRegistrationUpdate, EventRegistrationResponse,
)
from ngo_admin.services.csv_export import REGISTRATION_EXPORT_COLUMNS, ExportColumn

ALL_FILTER = "all"


@dataclass(frozen=True)
class EntityConfig:
    """Declarative description of one admin-managed entity type"""

    name: str
    label: str
    model: Any
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    search_fields: Tuple[str, ...]
    status_field: Optional[str] = None
    category_field: Optional[str] = None
    toggle_fields: Tuple[str, ...] = ()
    active_field: Optional[str] = None
    active_value: Any = True
    sum_fields: Tuple[str, ...] = ()
    sort_fields: Tuple[str, ...] = ("created_at", "updated_at")
    section: Optional[str] = None
    unique_fields: Tuple[str, ...] = field(default=())
    export_columns: Tuple[ExportColumn, ...] = ()

    @property
    def required_fields(self) -> List[str]:
        """Fields a create request (and the form modal) must fill in"""
        return [name for name, info in self.create_schema.model_fields.items() if info.is_required()]

    @property
    def list_fields(self) -> List[str]:
        """Columns stored as JSON arrays of strings"""
        return [column.name for column in self.model.__table__.columns if isinstance(column.type, JSON)]

    def form_defaults(self) -> Dict[str, Any]:
        """Blank draft used when the form modal opens for a new record"""
        defaults = {}
        for name, info in self.create_schema.model_fields.items():
            if info.is_required():
                defaults[name] = ""
            else:
                defaults[name] = info.get_default(call_default_factory=True)
        return defaults

    def is_active(self, record: Dict[str, Any]) -> bool:
        if not self.active_field:
            return True
        return record.get(self.active_field) == self.active_value


def is_all(value: Optional[str]) -> bool:
    """True when a filter value means "no filter" (None, empty or "all")"""
    return value is None or value.strip() == "" or value.strip().lower() == ALL_FILTER


ENTITIES: List[EntityConfig] = [
    EntityConfig(
        name="events",
        label="Event",
        model=Event,
        create_schema=EventCreate,
        update_schema=EventUpdate,
        response_schema=EventResponse,
        search_fields=("title", "location", "description", "category"),
        category_field="category",
        toggle_fields=("featured", "visible"),
        active_field="visible",
        sum_fields=("registrations", "max_capacity"),
        sort_fields=("created_at", "updated_at", "title", "registrations"),
        section="events",
    ),
    EntityConfig(
        name="event-registrations",
        label="Registration",
        model=EventRegistration,
        create_schema=EventRegistrationCreate,
        update_schema=EventRegistrationUpdate,
        response_schema=EventRegistrationResponse,
        search_fields=("name", "email", "event_title"),
        status_field="status",
        category_field="event_title",
        active_field="status",
        active_value="confirmed",
        sum_fields=("participants", "amount"),
        sort_fields=("created_at", "updated_at", "name", "event_title", "participants"),
        section="events",
        export_columns=REGISTRATION_EXPORT_COLUMNS,
    ),
    EntityConfig(
        name="subscribers",
        label="Subscriber",
        model=Subscriber,
        create_schema=SubscriberCreate,
        update_schema=SubscriberUpdate,
        response_schema=SubscriberResponse,
        search_fields=("email", "name", "tags"),
        status_field="status",
        category_field="source",
        active_field="status",
        active_value="active",
        sort_fields=("created_at", "updated_at", "email", "name"),
        section="newsletter",
        unique_fields=("email",),
    ),
    EntityConfig(
        name="newsletter-campaigns",
        label="Campaign",
        model=NewsletterCampaign,
        create_schema=CampaignCreate,
        update_schema=CampaignUpdate,
        response_schema=CampaignResponse,
        search_fields=("subject",),
        status_field="status",
        active_field="status",
        active_value="sent",
        sum_fields=("recipients",),
        sort_fields=("created_at", "updated_at", "subject", "recipients"),
        section="newsletter",
    ),
    EntityConfig(
        name="volunteer-opportunities",
        label="Volunteer opportunity",
        model=VolunteerOpportunity,
        create_schema=VolunteerOpportunityCreate,
        update_schema=VolunteerOpportunityUpdate,
        response_schema=VolunteerOpportunityResponse,
        search_fields=("title", "description", "category", "location", "skills_required"),
        category_field="category",
        toggle_fields=("visible", "urgent", "remote"),
        active_field="visible",
        sum_fields=("spots_available", "current_volunteers"),
        sort_fields=("created_at", "updated_at", "title", "spots_available"),
        section="volunteer",
    ),
    EntityConfig(
        name="freelance-gigs",
        label="Freelance gig",
        model=FreelanceGig,
        create_schema=FreelanceGigCreate,
        update_schema=FreelanceGigUpdate,
        response_schema=FreelanceGigResponse,
        search_fields=("title", "platform", "category", "description", "skills"),
        status_field="status",
        category_field="category",
        active_field="status",
        active_value="Active",
        sum_fields=("applications",),
        sort_fields=("created_at", "updated_at", "title", "hourly_rate_max", "applications"),
        section="freelance",
    ),
    EntityConfig(
        name="courses",
        label="Course",
        model=Course,
        create_schema=CourseCreate,
        update_schema=CourseUpdate,
        response_schema=CourseResponse,
        search_fields=("title", "description", "provider"),
        status_field="status",
        category_field="category",
        toggle_fields=("certificate", "job_assistance", "is_free", "is_popular"),
        active_field="status",
        active_value="Active",
        sum_fields=("students",),
        sort_fields=("created_at", "updated_at", "title", "rating", "students", "price"),
        section="skill-training",
    ),
    EntityConfig(
        name="legal-cases",
        label="Case",
        model=LegalCase,
        create_schema=LegalCaseCreate,
        update_schema=LegalCaseUpdate,
        response_schema=LegalCaseResponse,
        search_fields=("case_number", "title", "petitioner", "respondent"),
        status_field="status",
        category_field="court",
        toggle_fields=("urgent",),
        active_field="status",
        active_value="active",
        sort_fields=("created_at", "updated_at", "case_number", "title"),
        section="case-tracker",
        unique_fields=("case_number",),
    ),
    EntityConfig(
        name="laws",
        label="Law",
        model=Law,
        create_schema=LawCreate,
        update_schema=LawUpdate,
        response_schema=LawResponse,
        search_fields=("title", "act", "keywords", "summary"),
        category_field="act",
        toggle_fields=("verified",),
        active_field="verified",
        sort_fields=("created_at", "updated_at", "title", "act"),
        section="law-finder",
    ),
    EntityConfig(
        name="testimonials",
        label="Testimonial",
        model=Testimonial,
        create_schema=TestimonialCreate,
        update_schema=TestimonialUpdate,
        response_schema=TestimonialResponse,
        search_fields=("quote", "name", "role"),
        toggle_fields=("is_active", "featured", "verified"),
        active_field="is_active",
        sort_fields=("created_at", "updated_at", "display_order", "rating", "name"),
        section="testimonials",
    ),
    EntityConfig(
        name="video-lectures",
        label="Video lecture",
        model=VideoLecture,
        create_schema=VideoLectureCreate,
        update_schema=VideoLectureUpdate,
        response_schema=VideoLectureResponse,
        search_fields=("title", "instructor", "tags"),
        status_field="status",
        category_field="category",
        toggle_fields=("is_new", "featured"),
        active_field="status",
        active_value="Published",
        sum_fields=("views",),
        sort_fields=("created_at", "updated_at", "title", "views", "rating"),
        section="video-lectures",
    ),
]

ENTITY_REGISTRY: Dict[str, EntityConfig] = {entity.name: entity for entity in ENTITIES}

# Page key -> primary entity shown on that page (first registered wins)
PAGE_ENTITIES: Dict[str, str] = {}
for _entity in ENTITIES:
    if _entity.section and _entity.section not in PAGE_ENTITIES:
        PAGE_ENTITIES[_entity.section] = _entity.name


def get_entity(name: str) -> EntityConfig:
    """Look up an entity type by its url name"""
    try:
        return ENTITY_REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown entity type: {name}") from None
