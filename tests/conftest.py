"""Shared test fixtures and configuration for pytest."""
import os

# Keep module-level engine creation away from a real MySQL server
os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

import json
from datetime import date
from typing import Callable, Dict, List
from unittest.mock import Mock

import azure.functions as func
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from filmorate_service.models import Base, Director, Film, Genre, MpaRating, User
from filmorate_service.repos import FilmRepository, UserRepository


# ===== Database Fixtures =====

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_db_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(bind=test_db_engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="function")
def test_db_session(test_session_factory):
    """Create a database session for testing."""
    session = test_session_factory()
    yield session
    session.close()


@pytest.fixture
def patch_session_local(monkeypatch, test_session_factory):
    """Route blueprint sessions to the test database."""
    import filmorate_service.blueprints.http as http_module
    monkeypatch.setattr(http_module, 'SessionLocal', test_session_factory)
    return test_session_factory


# ===== Reference Data Fixtures =====

@pytest.fixture
def reference_data(test_db_session) -> Dict[str, list]:
    """Seed MPA ratings, genres and directors."""
    mpa = [MpaRating(id=1, name='G'), MpaRating(id=2, name='PG'), MpaRating(id=3, name='PG-13')]
    genres = [Genre(id=1, name='Comedy'), Genre(id=2, name='Drama'), Genre(id=3, name='Thriller')]
    directors = [
        Director(id=1, name='Christopher Nolan'),
        Director(id=2, name='Greta Gerwig'),
    ]
    test_db_session.add_all(mpa + genres + directors)
    test_db_session.commit()

    return {'mpa': mpa, 'genres': genres, 'directors': directors}


# ===== Entity Factories =====

@pytest.fixture
def make_user(test_db_session) -> Callable[..., User]:
    """Factory creating users through the repository."""
    repo = UserRepository(test_db_session)
    counter = {'n': 0}

    def _make_user(login: str | None = None, name: str | None = None, **kwargs) -> User:
        counter['n'] += 1
        login = login or f"user{counter['n']}"
        return repo.create_user({
            'email': kwargs.get('email', f"{login}@example.com"),
            'login': login,
            'name': name,
            'birthday': kwargs.get('birthday', date(1990, 1, 1)),
        })

    return _make_user


@pytest.fixture
def make_film(test_db_session, reference_data) -> Callable[..., Film]:
    """Factory creating films through the repository."""
    repo = FilmRepository(test_db_session)
    counter = {'n': 0}

    def _make_film(name: str | None = None, **kwargs) -> Film:
        counter['n'] += 1
        return repo.create_film({
            'name': name or f"Film {counter['n']}",
            'description': kwargs.get('description', 'A film'),
            'release_date': kwargs.get('release_date', date(2000, 1, 1)),
            'duration': kwargs.get('duration', 120),
            'mpa_id': kwargs.get('mpa_id', 1),
            'genre_ids': kwargs.get('genre_ids', []),
            'director_ids': kwargs.get('director_ids', []),
        })

    return _make_film


@pytest.fixture
def sample_users(make_user) -> List[User]:
    """Three users: alice, bob and carol."""
    return [make_user('alice', 'Alice'), make_user('bob', 'Bob'), make_user('carol', 'Carol')]


@pytest.fixture
def sample_films(make_film) -> List[Film]:
    """Four films with a mix of genres, years and directors."""
    return [
        make_film('Inception', release_date=date(2010, 7, 16), genre_ids=[3], director_ids=[1]),
        make_film('Lady Bird', release_date=date(2017, 11, 3), genre_ids=[1, 2], director_ids=[2]),
        make_film('Tenet', release_date=date(2020, 8, 26), genre_ids=[3], director_ids=[1]),
        make_film('Barbie', release_date=date(2023, 7, 21), genre_ids=[1], director_ids=[2]),
    ]


# ===== Azure Functions Fixtures =====

@pytest.fixture
def make_request() -> Callable[..., Mock]:
    """Build a mock Azure Functions HttpRequest."""
    def _make_request(route_params=None, params=None, body=None) -> Mock:
        mock_req = Mock(spec=func.HttpRequest)
        mock_req.route_params = {k: str(v) for k, v in (route_params or {}).items()}
        mock_req.params = {k: str(v) for k, v in (params or {}).items()}
        if body is None:
            mock_req.get_json.side_effect = ValueError("No JSON body")
        else:
            mock_req.get_json.return_value = body
            mock_req.get_body.return_value = json.dumps(body).encode()
        return mock_req

    return _make_request
