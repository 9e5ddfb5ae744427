from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from fixer_import.parsing.primitives import (
    parse_enum,
    parse_flag,
    parse_float,
    parse_instant_iso,
    parse_int_in_range,
    parse_optional_text,
    parse_positive_float,
    parse_positive_int,
    parse_required_text,
    parse_split_list,
)
from fixer_import.parsing.schema import FieldSpec, RecordSchema


# closed category set used by job creation. Import only checks non-emptiness.
JOB_CATEGORIES: tuple[str, ...] = ("cleaning", "maintenance", "security", "landscaping", "moving")
PAY_TYPES: tuple[str, ...] = ("fixed", "hourly")
URGENCIES: tuple[str, ...] = ("low", "medium", "high", "urgent")

MIN_WORKERS = 1
MAX_WORKERS = 50


@dataclass(frozen=True, slots=True)
class Location:
    address: str
    latitude: float
    longitude: float
    city: str
    state: str
    zip_code: str


@dataclass(frozen=True, slots=True)
class PayRate:
    type: Literal["fixed", "hourly"]
    amount: float
    currency: Literal["USD"] = "USD"


@dataclass(frozen=True, slots=True)
class Schedule:
    start_date: str             # normalized ISO-8601 UTC instant
    recurring: bool = False     # never recurring at import time


@dataclass(frozen=True, slots=True)
class JobImportRecord:
    """A validated import row, in the shape job creation consumes."""
    title: str
    description: str
    location: Location
    category: str
    pay_rate: PayRate
    schedule: Schedule
    requirements: tuple[str, ...]
    urgency: str
    worker_count: int
    estimated_duration: int     # hours
    client_notes: str | None
    background_check_required: bool
    equipment_provided: bool
    parking_available: bool = False

    def to_mapping(self) -> dict[str, Any]:
        """camelCase nested payload, as sent to the job-creation API."""
        return {
            "title": self.title,
            "description": self.description,
            "location": {
                "address": self.location.address,
                "latitude": self.location.latitude,
                "longitude": self.location.longitude,
                "city": self.location.city,
                "state": self.location.state,
                "zipCode": self.location.zip_code,
            },
            "category": self.category,
            "payRate": {
                "type": self.pay_rate.type,
                "amount": self.pay_rate.amount,
                "currency": self.pay_rate.currency,
            },
            "schedule": {
                "startDate": self.schedule.start_date,
                "recurring": self.schedule.recurring,
            },
            "requirements": list(self.requirements),
            "urgency": self.urgency,
            "workerCount": self.worker_count,
            "estimatedDuration": self.estimated_duration,
            "clientNotes": self.client_notes,
            "backgroundCheckRequired": self.background_check_required,
            "equipmentProvided": self.equipment_provided,
            "parkingAvailable": self.parking_available,
        }


def _build_job(v: Mapping[str, Any]) -> JobImportRecord:
    """Assemble validated flat columns into the nested record."""
    return JobImportRecord(
        title=v["title"],
        description=v["description"],
        location=Location(
            address=v["address"],
            latitude=v["latitude"],
            longitude=v["longitude"],
            city=v["city"],
            state=v["state"],
            zip_code=v["zipCode"],
        ),
        category=v["category"],
        pay_rate=PayRate(type=v["payType"], amount=v["payAmount"]),
        schedule=Schedule(start_date=v["scheduledStart"]),
        requirements=v["requirements"],
        urgency=v["urgency"],
        worker_count=v["workerCount"],
        estimated_duration=v["estimatedDuration"],
        client_notes=v["clientNotes"],
        background_check_required=v["backgroundCheckRequired"],
        equipment_provided=v["equipmentProvided"],
    )


JOB_IMPORT_SCHEMA: RecordSchema[JobImportRecord] = RecordSchema(
    name="jobs",
    build=_build_job,
    # order is also the headerless column order and the template column order
    fields=[
        FieldSpec("title", lambda v: parse_required_text(v, field="title", message="Title is required")),
        FieldSpec("description", lambda v: parse_required_text(v, field="description", message="Description is required")),
        FieldSpec("category", lambda v: parse_required_text(v, field="category", message="Category is required")),
        FieldSpec("address", lambda v: parse_required_text(v, field="address", message="Address is required")),
        FieldSpec("city", lambda v: parse_required_text(v, field="city", message="City is required")),
        FieldSpec("state", lambda v: parse_required_text(v, field="state", message="State is required")),
        FieldSpec("zipCode", lambda v: parse_required_text(v, field="zipCode", message="Zip code is required")),

        FieldSpec("latitude", lambda v: parse_float(v, field="latitude")),
        FieldSpec("longitude", lambda v: parse_float(v, field="longitude")),

        FieldSpec("payAmount", lambda v: parse_positive_float(v, field="payAmount")),
        FieldSpec("payType", lambda v: parse_enum(v, field="payType", choices=PAY_TYPES)),
        FieldSpec("estimatedDuration", lambda v: parse_positive_int(v, field="estimatedDuration")),

        FieldSpec("requirements", parse_split_list),
        FieldSpec("urgency", lambda v: parse_enum(v, field="urgency", choices=URGENCIES, default="medium")),
        FieldSpec(
            "workerCount",
            lambda v: parse_int_in_range(v, field="workerCount", default=1, minimum=MIN_WORKERS, maximum=MAX_WORKERS),
        ),

        FieldSpec("backgroundCheckRequired", parse_flag),
        FieldSpec("equipmentProvided", parse_flag),

        FieldSpec(
            "scheduledStart",
            lambda v: parse_instant_iso(v, field="scheduledStart", message="Scheduled start date is required"),
        ),
        FieldSpec("clientNotes", parse_optional_text),
    ],
)

JOB_IMPORT_COLUMNS: tuple[str, ...] = JOB_IMPORT_SCHEMA.columns


def record_to_row(record: JobImportRecord) -> dict[str, Any]:
    """
    Flatten a record back into the import column layout.
    The row re-imports to an equal record.
    """
    return {
        "title": record.title,
        "description": record.description,
        "category": record.category,
        "address": record.location.address,
        "city": record.location.city,
        "state": record.location.state,
        "zipCode": record.location.zip_code,
        "latitude": record.location.latitude,
        "longitude": record.location.longitude,
        "payAmount": record.pay_rate.amount,
        "payType": record.pay_rate.type,
        "estimatedDuration": record.estimated_duration,
        "requirements": ";".join(record.requirements),
        "urgency": record.urgency,
        "workerCount": record.worker_count,
        "backgroundCheckRequired": record.background_check_required,
        "equipmentProvided": record.equipment_provided,
        "scheduledStart": record.schedule.start_date,
        "clientNotes": record.client_notes,
    }


# downloadable sample for users preparing an import file
JOB_IMPORT_TEMPLATE = "\n".join(
    [
        ",".join(JOB_IMPORT_COLUMNS),
        'Office Cleaning,Daily office cleaning and maintenance,cleaning,"123 Main St, Suite 100",Springfield,IL,62701,39.7817,-89.6501,25.00,hourly,2,"vacuuming;dusting;trash removal",medium,1,false,true,2024-01-15T09:00:00Z,Please use eco-friendly products',
        'Lawn Maintenance,Weekly lawn mowing and edging,landscaping,"456 Oak Ave",Springfield,IL,62704,39.7990,-89.6540,150.00,fixed,3,"mowing;edging;leaf removal",low,2,false,true,2024-01-16T08:00:00Z,Equipment storage available in garage',
    ]
)
