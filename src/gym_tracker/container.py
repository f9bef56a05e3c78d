from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.document_attendance_repository import DocumentAttendanceRepository
from .attendance.keyvalue_attendance_repository import KeyValueAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import ShardedAttendanceStore
from .backend.selector import BackendDecision, BackendSelector
from .documents.client import DocumentClient
from .documents.mysql_document_client import MySQLDocumentClient
from .keyvalue.store import JsonFileKeyValueStore, KeyValueStore
from .stats.service import StatsService
from .training_types.document_training_type_repository import DocumentTrainingTypeRepository
from .training_types.keyvalue_training_type_repository import KeyValueTrainingTypeRepository
from .training_types.repository import TrainingTypeRepository
from .training_types.service import TrainingTypeRegistry
from .users.repository import DocumentProfileRepository, KeyValueProfileRepository, ProfileRepository
from .users.service import UserProfileStore


@dataclass(frozen=True)
class Container:
    decision: BackendDecision

    attendance_repo: AttendanceRepository
    training_types_repo: TrainingTypeRepository
    profiles_repo: ProfileRepository

    attendance_store: ShardedAttendanceStore
    training_type_registry: TrainingTypeRegistry
    profile_store: UserProfileStore
    stats_service: StatsService


def build_services(
    decision: BackendDecision,
    *,
    document_client: Optional[DocumentClient] = None,
    kv_store: Optional[KeyValueStore] = None,
) -> Container:
    """Wire one backend variant behind every service.

    The decision picks the variant once; nothing downstream branches on it.
    Under the remote store, services stamp instants with the store clock.
    """
    clock = None
    if decision.remote_available:
        if document_client is None:
            raise ValueError("remote backend selected without a document client")
        clock = document_client.server_timestamp
        attendance_repo = DocumentAttendanceRepository(document_client)
        training_types_repo = DocumentTrainingTypeRepository(document_client)
        profiles_repo = DocumentProfileRepository(document_client)
    else:
        if kv_store is None:
            raise ValueError("fallback backend selected without a key-value store")
        attendance_repo = KeyValueAttendanceRepository(kv_store)
        training_types_repo = KeyValueTrainingTypeRepository(kv_store)
        profiles_repo = KeyValueProfileRepository(kv_store)

    attendance_store = ShardedAttendanceStore(attendance_repo, decision, clock=clock)
    training_type_registry = TrainingTypeRegistry(training_types_repo, clock=clock)

    return Container(
        decision=decision,
        attendance_repo=attendance_repo,
        training_types_repo=training_types_repo,
        profiles_repo=profiles_repo,
        attendance_store=attendance_store,
        training_type_registry=training_type_registry,
        profile_store=UserProfileStore(profiles_repo, clock=clock),
        stats_service=StatsService(attendance_store, training_type_registry),
    )


def build_container(*, db_config: dict, data_dir: str, selector: Optional[BackendSelector] = None) -> Container:
    selector = selector or BackendSelector(db_config)
    decision = selector.resolve()

    if decision.remote_available:
        return build_services(decision, document_client=MySQLDocumentClient(selector.connection_factory))
    return build_services(decision, kv_store=JsonFileKeyValueStore(data_dir))
