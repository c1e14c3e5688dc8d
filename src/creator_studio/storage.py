"""
SQLite storage for saved projects, competitor history and preferences
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import aiosqlite

from creator_studio.config import DEFAULT_DB_PATH
from creator_studio.errors import StorageError
from creator_studio.models import CompetitorAnalysisResult, CompetitorItem, SavedProject

logger = logging.getLogger(__name__)

TRENDING_TIME_FRAME_KEY = "trending_time_frame"


class Storage:
    """
    Async SQLite storage for the studio's persisted state.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Initialize storage.

        Args:
            db_path: Path to SQLite database (defaults to ~/.creator_studio/data.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: Optional[aiosqlite.Connection] = None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageError("Storage is not connected; call connect() first")
        return self._connection

    async def connect(self):
        """Connect to the database and initialize tables"""
        self._connection = await aiosqlite.connect(str(self.db_path))
        self._connection.row_factory = aiosqlite.Row
        await self._init_tables()

    async def close(self):
        """Close the database connection"""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def _init_tables(self):
        """Initialize database tables"""
        await self.connection.executescript("""
            CREATE TABLE IF NOT EXISTS saved_projects (
                id TEXT PRIMARY KEY,
                timestamp INTEGER NOT NULL,
                idea TEXT NOT NULL,
                content_type TEXT NOT NULL,
                titles TEXT NOT NULL,
                seo_description TEXT,
                keywords TEXT,
                tags TEXT
            );

            CREATE TABLE IF NOT EXISTS competitor_history (
                id TEXT PRIMARY KEY,
                timestamp INTEGER NOT NULL,
                competitor_name TEXT NOT NULL,
                payload TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS preferences (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_projects_timestamp ON saved_projects(timestamp DESC);
            CREATE INDEX IF NOT EXISTS idx_competitors_timestamp ON competitor_history(timestamp DESC);
        """)
        await self.connection.commit()

    def _row_to_project(self, row: aiosqlite.Row) -> SavedProject:
        """Convert database row to SavedProject"""
        return SavedProject(
            id=row["id"],
            timestamp=row["timestamp"],
            idea=row["idea"],
            content_type=row["content_type"],
            titles=json.loads(row["titles"]),
            seo_description=row["seo_description"] or "",
            keywords=json.loads(row["keywords"]) if row["keywords"] else [],
            tags=json.loads(row["tags"]) if row["tags"] else [],
        )

    # Saved projects

    async def save_project(self, project: SavedProject) -> str:
        """Save a project, replacing any project with the same id"""
        await self.connection.execute("""
            INSERT OR REPLACE INTO saved_projects
            (id, timestamp, idea, content_type, titles, seo_description, keywords, tags)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            project.id, project.timestamp, project.idea, project.content_type,
            json.dumps(project.titles), project.seo_description,
            json.dumps(project.keywords), json.dumps(project.tags),
        ))
        await self.connection.commit()
        return project.id

    async def get_project(self, project_id: str) -> Optional[SavedProject]:
        """Get a project by ID"""
        async with self.connection.execute(
            "SELECT * FROM saved_projects WHERE id = ?", (project_id,)
        ) as cursor:
            row = await cursor.fetchone()
            return self._row_to_project(row) if row else None

    async def get_projects(self, limit: int = 100, offset: int = 0) -> list[SavedProject]:
        """Get saved projects, newest first"""
        async with self.connection.execute(
            "SELECT * FROM saved_projects ORDER BY timestamp DESC, rowid DESC LIMIT ? OFFSET ?",
            (limit, offset),
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_project(row) for row in rows]

    async def delete_project(self, project_id: str) -> bool:
        result = await self.connection.execute(
            "DELETE FROM saved_projects WHERE id = ?", (project_id,)
        )
        await self.connection.commit()
        return result.rowcount > 0

    async def export_projects(self, path: Union[str, Path]) -> int:
        """
        Write every saved project to a JSON backup file.

        Returns:
            Number of projects exported
        """
        projects = await self.get_projects(limit=-1)
        document = [p.model_dump(mode="json", by_alias=True) for p in projects]

        try:
            Path(path).write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not export projects to {path}: {e}") from e

        logger.info("Exported %d projects to %s", len(projects), path)
        return len(projects)

    # Competitor history

    async def save_competitor(self, result: CompetitorAnalysisResult) -> CompetitorItem:
        """Record a competitor analysis in history"""
        item = result if isinstance(result, CompetitorItem) else CompetitorItem.from_result(result)

        await self.connection.execute("""
            INSERT OR REPLACE INTO competitor_history (id, timestamp, competitor_name, payload)
            VALUES (?, ?, ?, ?)
        """, (item.id, item.timestamp, item.competitor_name, item.model_dump_json(by_alias=True)))
        await self.connection.commit()
        return item

    async def get_competitors(self, limit: int = 25) -> list[CompetitorItem]:
        """Get competitor analyses, newest first"""
        async with self.connection.execute(
            "SELECT payload FROM competitor_history ORDER BY timestamp DESC, rowid DESC LIMIT ?",
            (limit,),
        ) as cursor:
            rows = await cursor.fetchall()
            return [CompetitorItem.model_validate_json(row["payload"]) for row in rows]

    async def delete_competitor(self, item_id: str) -> bool:
        result = await self.connection.execute(
            "DELETE FROM competitor_history WHERE id = ?", (item_id,)
        )
        await self.connection.commit()
        return result.rowcount > 0

    # Preferences

    async def get_preference(self, key: str, default: Optional[str] = None) -> Optional[str]:
        async with self.connection.execute(
            "SELECT value FROM preferences WHERE key = ?", (key,)
        ) as cursor:
            row = await cursor.fetchone()
            return row["value"] if row else default

    async def set_preference(self, key: str, value: str):
        await self.connection.execute(
            "INSERT OR REPLACE INTO preferences (key, value) VALUES (?, ?)",
            (key, value),
        )
        await self.connection.commit()

    async def get_stats(self) -> dict:
        """Get database statistics"""
        stats = {}

        async with self.connection.execute("SELECT COUNT(*) FROM saved_projects") as cursor:
            row = await cursor.fetchone()
            stats["total_projects"] = row[0]

        async with self.connection.execute("SELECT COUNT(*) FROM competitor_history") as cursor:
            row = await cursor.fetchone()
            stats["total_competitors"] = row[0]

        async with self.connection.execute("""
            SELECT content_type, COUNT(*) as count FROM saved_projects GROUP BY content_type
        """) as cursor:
            rows = await cursor.fetchall()
            stats["projects_by_type"] = {row["content_type"]: row["count"] for row in rows}

        return stats

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
