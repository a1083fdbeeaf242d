"""
Graph store schema and connection management.

Uses SQLite with SQLAlchemy for node and relationship storage. A single
session serves one logical writer; every public graph operation runs inside
`GraphStore.unit_of_work()`.
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
    event,
    inspect,
    or_,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from .errors import IntegrityViolation, StoreFailure

Base = declarative_base()

JOB_LABEL = "Job"
SIMILAR_TO = "SIMILAR_TO"
DEFAULT_NODE_WEIGHT = 10.0


class JobNode(Base):
    """Job posting vertex."""

    __tablename__ = "job_nodes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String, nullable=False, default=JOB_LABEL)
    job_id = Column(String, nullable=False, unique=True)  # company: title
    company = Column(String, nullable=False)
    job_title = Column(String, nullable=False)
    weight = Column(Float, nullable=False, default=DEFAULT_NODE_WEIGHT)

    def __repr__(self) -> str:
        return f"<JobNode {self.job_id!r} weight={self.weight}>"


class Relationship(Base):
    """Undirected similarity edge. Created once per unordered pair of jobs."""

    __tablename__ = "relationships"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_id = Column(Integer, ForeignKey("job_nodes.id"), nullable=False, index=True)
    end_id = Column(Integer, ForeignKey("job_nodes.id"), nullable=False, index=True)
    type = Column(String, nullable=False, default=SIMILAR_TO)
    weight = Column(Float, nullable=False)

    start = relationship(JobNode, foreign_keys=[start_id])
    end = relationship(JobNode, foreign_keys=[end_id])

    def __repr__(self) -> str:
        return f"<Relationship {self.start_id}-{self.end_id} weight={self.weight}>"


# Properties that can be looked up or indexed, keyed by their column name.
NODE_PROPERTIES = {
    "job_id": JobNode.job_id,
    "company": JobNode.company,
    "job_title": JobNode.job_title,
    "weight": JobNode.weight,
}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(url: str) -> Engine:
    """
    Create an engine with foreign keys enforced.

    Args:
        url: SQLAlchemy database URL (`sqlite://` for an in-memory graph)
    """
    if url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class GraphStore:
    """
    Property graph of job nodes and similarity relationships.

    Node and relationship objects handed out by the store stay attached to
    its session, so they act as live references across units of work.
    """

    def __init__(self, url: str = "sqlite://"):
        """
        Open (and if needed create) the graph at `url`.

        Raises:
            StoreFailure: the database file or its tables cannot be created
        """
        self.url = url
        try:
            if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
                Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
            self.engine = get_engine(url)
            Base.metadata.create_all(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise StoreFailure(f"Graph store failure: {e}") from e
        self.session: Session = sessionmaker(bind=self.engine, expire_on_commit=False)()
        self._depth = 0

    def close(self) -> None:
        self.session.close()
        self.engine.dispose()

    def __enter__(self) -> "GraphStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Units of work

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        """
        Atomic scope. The outermost scope commits on success and rolls back
        on any error; nested scopes join it.

        Raises:
            StoreFailure: the backend raised a SQLAlchemy error
        """
        if self._depth:
            self._depth += 1
            try:
                yield self.session
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self.session
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreFailure(f"Graph store failure: {e}") from e
        except BaseException:
            self.session.rollback()
            raise
        finally:
            self._depth = 0

    # Nodes

    def create_node(self, label: str = JOB_LABEL, **properties) -> JobNode:
        node = JobNode(label=label, **properties)
        self.session.add(node)
        self.session.flush()
        return node

    def find_nodes(self, label: str = JOB_LABEL, key: Optional[str] = None, value=None) -> List[JobNode]:
        """
        Nodes with `label`, optionally filtered on one property, in insertion order.
        """
        query = self.session.query(JobNode).filter(JobNode.label == label)
        if key is not None:
            query = query.filter(self._property(key) == value)
        return query.order_by(JobNode.id).all()

    def delete_node(self, node: JobNode) -> None:
        """
        Raises:
            IntegrityViolation: the node still has relationships
        """
        remaining = len(self.relationships_of(node))
        if remaining:
            raise IntegrityViolation(
                f"Cannot delete {node.job_id!r}: {remaining} relationships still attached"
            )
        self.session.delete(node)
        self.session.flush()

    def count_nodes(self) -> int:
        return self.session.query(JobNode).count()

    # Relationships

    def create_relationship(
        self,
        start: JobNode,
        end: JobNode,
        rel_type: str = SIMILAR_TO,
        weight: float = 0.0,
    ) -> Relationship:
        rel = Relationship(start_id=start.id, end_id=end.id, type=rel_type, weight=weight)
        self.session.add(rel)
        return rel

    def relationships_of(self, node: JobNode) -> List[Relationship]:
        return (
            self.session.query(Relationship)
            .filter(or_(Relationship.start_id == node.id, Relationship.end_id == node.id))
            .order_by(Relationship.id)
            .all()
        )

    def all_relationships(self) -> List[Relationship]:
        return self.session.query(Relationship).order_by(Relationship.id).all()

    def other_endpoint(self, rel: Relationship, node: JobNode) -> JobNode:
        if rel.start_id == node.id:
            return rel.end
        if rel.end_id == node.id:
            return rel.start
        raise IntegrityViolation(f"{node.job_id!r} is not an endpoint of relationship {rel.id}")

    def delete_relationship(self, rel: Relationship) -> None:
        self.session.delete(rel)

    def count_relationships(self) -> int:
        return self.session.query(Relationship).count()

    # Indexes

    def create_index(self, label: str, key: str) -> str:
        """Create a lookup index on a node property. Returns the index name."""
        column = self._property(key)
        name = f"ix_{label.lower()}_{key}"
        with self.unit_of_work() as session:
            session.execute(
                text(f"CREATE INDEX IF NOT EXISTS {name} ON {JobNode.__tablename__} ({column.key})")
            )
        return name

    def index_population_progress(self, name: str) -> float:
        """Percent of the index built. SQLite builds indexes synchronously."""
        with self.unit_of_work() as session:
            indexes = inspect(session.connection()).get_indexes(JobNode.__tablename__)
        return 100.0 if any(ix["name"] == name for ix in indexes) else 0.0

    def await_index_online(self, name: str, timeout: float = 10.0, poll_interval: float = 0.1) -> None:
        """
        Raises:
            StoreFailure: the index is not online within `timeout` seconds
        """
        deadline = time.monotonic() + timeout
        while self.index_population_progress(name) < 100.0:
            if time.monotonic() >= deadline:
                raise StoreFailure(f"Index {name} not online after {timeout}s")
            time.sleep(poll_interval)

    @staticmethod
    def _property(key: str):
        try:
            return NODE_PROPERTIES[key]
        except KeyError:
            raise ValueError(f"Unknown node property: {key}") from None
