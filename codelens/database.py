import json
import sqlite3
import logging
from contextlib import closing
from typing import Optional, List, Dict, Any

from codelens.models import AnalysisRecord

DB_NAME = ".analyses.db"


def get_connection():
    """Get a database connection with row factory for dict-like access."""
    conn = sqlite3.connect(DB_NAME)
    conn.row_factory = sqlite3.Row
    return conn


def init_db():
    try:
        with closing(get_connection()) as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS code_analyses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    code TEXT NOT NULL,
                    analysis TEXT NOT NULL,
                    suggestions TEXT NOT NULL DEFAULT '[]',
                    score INTEGER NOT NULL,
                    file_name TEXT,
                    provider TEXT NOT NULL DEFAULT 'gemini',
                    model TEXT,
                    cost REAL,
                    tokens_used INTEGER,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_code_analyses_created ON code_analyses(created_at)")

            conn.commit()
    except Exception as e:
        logging.error(f"Failed to initialize database: {e}")


def save_analysis(record: AnalysisRecord) -> Optional[int]:
    try:
        with closing(get_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO code_analyses
                    (code, analysis, suggestions, score, file_name, provider, model, cost, tokens_used, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
            """, (
                record.code,
                record.analysis,
                json.dumps(record.suggestions),
                record.score,
                record.file_name,
                record.provider,
                record.model,
                record.cost,
                record.tokens_used,
            ))
            conn.commit()
            return cursor.lastrowid
    except Exception as e:
        logging.error(f"Failed to save analysis {record.file_name}: {e}")
        return None


def get_analysis(analysis_id: int) -> Optional[Dict[str, Any]]:
    try:
        with closing(get_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM code_analyses WHERE id = ?", (analysis_id,))
            row = cursor.fetchone()
        if not row:
            return None
        analysis = dict(row)
        analysis["suggestions"] = json.loads(analysis["suggestions"] or "[]")
        return analysis
    except Exception as e:
        logging.error(f"Failed to get analysis {analysis_id}: {e}")
        return None


def list_analyses(limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Summaries of stored analyses, newest first."""
    try:
        with closing(get_connection()) as conn:
            cursor = conn.cursor()
            query = """
                SELECT id, file_name, score, provider, created_at
                FROM code_analyses
                ORDER BY created_at DESC, id DESC
            """
            if limit is not None:
                cursor.execute(query + " LIMIT ?", (limit,))
            else:
                cursor.execute(query)
            rows = cursor.fetchall()
        return [dict(row) for row in rows]
    except Exception as e:
        logging.error(f"Failed to fetch analyses: {e}")
        return []
