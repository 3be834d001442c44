"""
SponsorHub - Test Configuration and Fixtures
"""
import os
import tempfile
from datetime import datetime, timedelta
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
_TEST_DIR = tempfile.mkdtemp(prefix="sponsorhub-tests-")
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"

os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = TEST_DATABASE_URL
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['NOTIFICATION_CLEANUP_ENABLED'] = 'false'
os.environ['UPLOAD_PATH'] = os.path.join(_TEST_DIR, 'uploads')
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['LOG_FILE'] = os.path.join(_TEST_DIR, 'test.log')

from sponsorhub.main import app
from sponsorhub.core.database import Base, get_db
from sponsorhub.core.security import get_password_hash, create_access_token
from sponsorhub.models import (
    Collaboration,
    CollaborationStatus,
    Event,
    EventMode,
    EventStatus,
    ProposalStatus,
    SponsorshipProposal,
    User,
    UserRole,
)

fake = Faker()

TEST_PASSWORD = 'testpassword123'

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client; every request gets its own session like in production"""
    async def override_get_db():
        async with TestSessionLocal() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def fetch(model, obj_id):
    """Read a row back through a fresh session"""
    async with TestSessionLocal() as session:
        return await session.get(model, obj_id)


def auth_headers_for(user: User) -> dict:
    token_data = {
        'sub': str(user.id),
        'email': user.email,
        'role': user.role.value
    }
    token = create_access_token(token_data)
    return {'Authorization': f'Bearer {token}'}


async def create_user(db: AsyncSession, role: UserRole, **overrides) -> User:
    user = User(
        name=overrides.pop('name', fake.name()),
        email=overrides.pop('email', fake.unique.email().lower()),
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role,
        is_active=overrides.pop('is_active', True),
        is_verified=overrides.pop('is_verified', True),
        organization_name=overrides.pop('organization_name', fake.company()),
        **overrides
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_event(db: AsyncSession, organizer: User, **overrides) -> Event:
    start = datetime.utcnow() + timedelta(days=30)
    event = Event(
        title=overrides.pop('title', fake.catch_phrase()),
        description=overrides.pop('description', fake.paragraph()),
        category=overrides.pop('category', 'technology'),
        start_date=overrides.pop('start_date', start),
        end_date=overrides.pop('end_date', start + timedelta(days=2)),
        date=start,
        amount_required=overrides.pop('amount_required', 5000),
        location=overrides.pop('location', fake.city()),
        event_mode=overrides.pop('event_mode', EventMode.OFFLINE),
        status=overrides.pop('status', EventStatus.DRAFT),
        is_approved=overrides.pop('is_approved', False),
        organizer=organizer,
        **overrides
    )
    db.add(event)
    await db.commit()
    return event


@pytest.fixture
async def organizer_user(db_session: AsyncSession) -> User:
    """Create an organizer test user"""
    return await create_user(db_session, UserRole.ORGANIZER)


@pytest.fixture
async def other_organizer(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.ORGANIZER)


@pytest.fixture
async def sponsor_user(db_session: AsyncSession) -> User:
    """Create a sponsor test user"""
    return await create_user(db_session, UserRole.SPONSOR)


@pytest.fixture
async def other_sponsor(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.SPONSOR)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin test user"""
    return await create_user(db_session, UserRole.ADMIN)


@pytest.fixture
def organizer_headers(organizer_user: User) -> dict:
    return auth_headers_for(organizer_user)


@pytest.fixture
def other_organizer_headers(other_organizer: User) -> dict:
    return auth_headers_for(other_organizer)


@pytest.fixture
def sponsor_headers(sponsor_user: User) -> dict:
    return auth_headers_for(sponsor_user)


@pytest.fixture
def other_sponsor_headers(other_sponsor: User) -> dict:
    return auth_headers_for(other_sponsor)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return auth_headers_for(admin_user)


@pytest.fixture
async def draft_event(db_session: AsyncSession, organizer_user: User) -> Event:
    return await create_event(db_session, organizer_user)


@pytest.fixture
async def public_event(db_session: AsyncSession, organizer_user: User) -> Event:
    """Published and approved - visible to everyone"""
    return await create_event(
        db_session, organizer_user, status=EventStatus.PUBLISHED, is_approved=True
    )


@pytest.fixture
async def pending_proposal(
    db_session: AsyncSession, public_event: Event, sponsor_user: User
) -> SponsorshipProposal:
    proposal = SponsorshipProposal(
        event=public_event,
        sponsor=sponsor_user,
        proposed_amount=2500,
        proposed_benefits=['Logo on banner', 'Booth space'],
        message='We would love to support this event',
        status=ProposalStatus.PENDING,
    )
    db_session.add(proposal)
    await db_session.commit()
    return proposal


async def create_collaboration(
    db: AsyncSession,
    proposal: SponsorshipProposal,
    status: CollaborationStatus = CollaborationStatus.PENDING,
) -> Collaboration:
    proposal.status = ProposalStatus.ACCEPTED
    collaboration = Collaboration(
        event=proposal.event,
        organizer=proposal.event.organizer,
        sponsor=proposal.sponsor,
        proposal=proposal,
        status=status,
        start_date=datetime.utcnow() if status == CollaborationStatus.ACTIVE else None,
    )
    db.add(collaboration)
    await db.commit()
    return collaboration


@pytest.fixture
async def collaboration(db_session: AsyncSession, pending_proposal: SponsorshipProposal) -> Collaboration:
    return await create_collaboration(db_session, pending_proposal)


@pytest.fixture
async def active_collaboration(db_session: AsyncSession, pending_proposal: SponsorshipProposal) -> Collaboration:
    return await create_collaboration(db_session, pending_proposal, CollaborationStatus.ACTIVE)
