# election/operations/health_monitor.py
# Liveness/Readiness health checks (app, database)

import logging
from datetime import datetime, timezone
from typing import Dict

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from election import db

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


def _check_db() -> Dict:
    try:
        db.session.execute(text('SELECT 1'))
        return {"ok": True}
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning("Database health probe failed: %s", e)
        return {"ok": False, "error": "database unavailable"}


@health_bp.get("/health")
def liveness():
    return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})


@health_bp.get("/ready")
def readiness():
    database = _check_db()
    res = {"db": database, "overall_ok": database["ok"]}
    code = 200 if database["ok"] else 503
    return jsonify(res), code
