"""
Dynamic REST API - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_mock_api.db'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['DEBUG'] = 'true'
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['LOG_FILE'] = ''

from app.main import app
from app.core.database import Base, get_db
from app.models.project import Project
from app.models.endpoint import Endpoint
from app.modules.mock_engine.types import EndpointDefinition, HttpMethod, ProjectDefinition, ResponseType

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_mock_api.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_project(db_session: AsyncSession) -> Project:
    """Create a test project with default settings"""
    project = Project(
        name=fake.company(),
        description=fake.sentence(),
    )
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest.fixture
def make_endpoint(db_session: AsyncSession):
    """Factory inserting Endpoint rows directly, bypassing API validation"""
    async def _make(project: Project, **overrides) -> Endpoint:
        values = {
            'path': '/items',
            'method': 'GET',
            'schema_definition': {'id': '(random:uuid)', 'name': '(random:name)'},
            'count': 3,
            'response_type': 'list',
            'response_http_status': '200',
        }
        values.update(overrides)
        values['method'] = HttpMethod(values['method'])
        values['response_type'] = ResponseType(values['response_type'])
        endpoint = Endpoint(project_id=project.id, **values)
        db_session.add(endpoint)
        await db_session.commit()
        await db_session.refresh(endpoint)
        return endpoint

    return _make


@pytest.fixture
def project_definition() -> ProjectDefinition:
    return ProjectDefinition(id=fake.uuid4(), name=fake.company())


@pytest.fixture
def items_endpoint() -> EndpointDefinition:
    """GET /items list endpoint as used in most engine tests"""
    return EndpointDefinition(
        id=fake.uuid4(),
        path='/items',
        method='GET',
        schema_definition={'id': '(random:uuid)', 'name': '(random:name)', 'static': 'hello'},
        count=3,
    )
