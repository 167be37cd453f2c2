"""
Tests for scripts/init_database.py
"""

import json
from unittest.mock import Mock, patch

import pytest
from sqlalchemy import create_engine, inspect

from filmorate_service.models import Director, Genre, MpaRating
from scripts.init_database import (
    GENRES,
    MPA_RATINGS,
    create_schema,
    load_directors,
    main,
    seed_directors,
    seed_reference_data,
)


class TestCreateSchema:
    """Tests for create_schema function."""

    def test_create_schema_creates_tables(self):
        """Test that all tables exist afterwards."""
        # Arrange
        engine = create_engine("sqlite:///:memory:")

        # Act
        create_schema(engine)

        # Assert
        tables = set(inspect(engine).get_table_names())
        assert {'users', 'films', 'likes', 'friendships', 'reviews', 'review_likes', 'feed_events'} <= tables
        engine.dispose()


class TestSeedReferenceData:
    """Tests for seed_reference_data function."""

    def test_seed_inserts_all_rows(self, test_db_session):
        """Test seeding an empty database."""
        # Act
        inserted = seed_reference_data(test_db_session)

        # Assert
        assert inserted == len(MPA_RATINGS) + len(GENRES)
        assert test_db_session.query(MpaRating).filter_by(id=3).one().name == 'PG-13'
        assert test_db_session.query(Genre).count() == len(GENRES)

    def test_seed_is_idempotent(self, test_db_session):
        """Test that a second run inserts nothing."""
        # Arrange
        seed_reference_data(test_db_session)

        # Act
        inserted = seed_reference_data(test_db_session)

        # Assert
        assert inserted == 0
        assert test_db_session.query(MpaRating).count() == len(MPA_RATINGS)

    def test_seed_fills_gaps(self, test_db_session):
        """Test that only missing rows are added."""
        # Arrange
        test_db_session.add(MpaRating(id=1, name='G'))
        test_db_session.commit()

        # Act
        inserted = seed_reference_data(test_db_session)

        # Assert
        assert inserted == len(MPA_RATINGS) - 1 + len(GENRES)


class TestSeedDirectors:
    """Tests for load_directors and seed_directors functions."""

    def test_load_directors(self, tmp_path):
        """Test reading directors from a JSON file."""
        # Arrange
        path = tmp_path / 'directors.json'
        path.write_text(json.dumps([{'id': 1, 'name': 'Christopher Nolan'}, {'id': 2, 'name': 'Alexei Balabanov'}]))

        # Act
        directors = load_directors(path)

        # Assert
        assert directors == {1: 'Christopher Nolan', 2: 'Alexei Balabanov'}

    def test_seed_directors_skips_existing(self, test_db_session):
        """Test that existing directors are neither duplicated nor renamed."""
        # Arrange
        test_db_session.add(Director(id=1, name='C. Nolan'))
        test_db_session.commit()

        # Act
        inserted = seed_directors(test_db_session, {1: 'Christopher Nolan', 2: 'Greta Gerwig'})

        # Assert
        assert inserted == 1
        assert test_db_session.query(Director).filter_by(id=1).one().name == 'C. Nolan'
        assert test_db_session.query(Director).count() == 2

class TestMain:
    """Tests for main function."""

    @patch('scripts.init_database.seed_reference_data')
    @patch('scripts.init_database.create_schema')
    @patch('scripts.init_database.create_engine')
    def test_main_creates_and_seeds(self, mock_create_engine, mock_create_schema, mock_seed):
        """Test a full run with an explicit database URL."""
        # Arrange
        mock_engine = Mock()
        mock_create_engine.return_value = mock_engine

        with patch('sys.argv', ['init_database.py', '--database-url', 'sqlite:///:memory:']):
            # Act
            main()

        # Assert
        mock_create_engine.assert_called_once_with('sqlite:///:memory:', pool_pre_ping=True)
        mock_create_schema.assert_called_once_with(mock_engine)
        mock_seed.assert_called_once()
        mock_engine.dispose.assert_called_once()

    @patch('scripts.init_database.seed_reference_data')
    @patch('scripts.init_database.create_schema')
    @patch('scripts.init_database.create_engine')
    def test_main_skip_seed(self, mock_create_engine, mock_create_schema, mock_seed):
        """Test that --skip-seed only creates the schema."""
        with patch('sys.argv', ['init_database.py', '--database-url', 'sqlite://', '--skip-seed']):
            main()

        mock_create_schema.assert_called_once()
        mock_seed.assert_not_called()

    @patch('scripts.init_database.create_schema', side_effect=RuntimeError("no database"))
    @patch('scripts.init_database.create_engine')
    def test_main_exits_on_error(self, mock_create_engine, mock_create_schema):
        """Test that failures exit with status 1."""
        with patch('sys.argv', ['init_database.py', '--database-url', 'sqlite://']):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        mock_create_engine.return_value.dispose.assert_called_once()

    @patch('scripts.init_database.seed_directors')
    @patch('scripts.init_database.load_directors', return_value={1: 'Christopher Nolan'})
    @patch('scripts.init_database.seed_reference_data')
    @patch('scripts.init_database.create_schema')
    @patch('scripts.init_database.create_engine')
    def test_main_seeds_directors_file(
        self, mock_create_engine, mock_create_schema, mock_seed, mock_load, mock_seed_directors
    ):
        """Test that --directors-file loads and seeds directors."""
        with patch('sys.argv', ['init_database.py', '--database-url', 'sqlite://', '--directors-file', 'd.json']):
            main()

        mock_load.assert_called_once()
        assert str(mock_load.call_args.args[0]) == 'd.json'
        mock_seed_directors.assert_called_once()
        assert mock_seed_directors.call_args.args[1] == {1: 'Christopher Nolan'}
