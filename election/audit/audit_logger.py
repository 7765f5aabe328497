# election/audit/audit_logger.py

import os
import json
import hashlib
import base64
import logging
import threading
from datetime import datetime, timezone
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from flask import current_app

logger = logging.getLogger(__name__)

# Append-only audit trail of election events with hash chaining and Ed25519 signatures


def load_signing_key(pem_str):
    """Load the Ed25519 audit key from PEM text, or None when no key is configured."""
    if not pem_str:
        return None
    key = serialization.load_pem_private_key(pem_str.encode(), password=None)
    if not isinstance(key, Ed25519PrivateKey):
        raise ValueError("Audit signing key must be an Ed25519 private key")
    return key


def export_signing_key(key):
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()).decode()


class AuditLogger:
    def __init__(self, log_dir='logs', signing_key=None):
        self.log_dir = log_dir
        self.log_file = os.path.join(log_dir, 'audit.log')
        self.previous_hash = None
        # Serializes read-hash/append/update-hash across request threads
        self._lock = threading.Lock()

        os.makedirs(log_dir, exist_ok=True)

        if signing_key is None:
            logger.warning("No audit signing key configured; entries written now "
                           "will not verify after a restart")
            signing_key = Ed25519PrivateKey.generate()
        self.signing_key = signing_key
        self._load_previous_hash()

    def _load_previous_hash(self):
        if os.path.exists(self.log_file):
            with open(self.log_file, 'r') as f:
                lines = [line for line in f.readlines() if line.strip()]
                if lines:
                    try:
                        last_entry = json.loads(lines[-1])
                        self.previous_hash = last_entry.get('hash')
                    except ValueError:
                        self.previous_hash = None

    def log_security_event(self, event_type, data, user_id=None):
        with self._lock:
            self._append(event_type, data, user_id)

    def _append(self, event_type, data, user_id):
        try:
            log_entry = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "event_type": event_type,
                "data": data,
                "user_id": user_id,
                "previous_hash": self.previous_hash,
            }
            entry_json = json.dumps(log_entry, sort_keys=True)
            entry_hash = hashlib.sha256(entry_json.encode()).hexdigest()

            signature = self.signing_key.sign(entry_json.encode())
            log_entry['hash'] = entry_hash
            log_entry['signature'] = base64.b64encode(signature).decode()

            with open(self.log_file, 'a') as f:
                f.write(json.dumps(log_entry) + "\n")

            self.previous_hash = entry_hash
        except (OSError, TypeError, ValueError):
            # The audit trail must never break the request that produced the event
            logger.exception("Audit log write failed for event %s", event_type)

    def verify_log_integrity(self):
        if not os.path.exists(self.log_file):
            return True
        public_key = self.signing_key.public_key()
        previous_hash = None
        try:
            with open(self.log_file, 'r') as f:
                for line in f:
                    if not line.strip():
                        continue
                    log_entry = json.loads(line)
                    if log_entry.get('previous_hash') != previous_hash:
                        return False
                    entry_copy = dict(log_entry)
                    signature = base64.b64decode(entry_copy.pop('signature'))
                    entry_hash = entry_copy.pop('hash')
                    entry_json = json.dumps(entry_copy, sort_keys=True).encode()
                    if hashlib.sha256(entry_json).hexdigest() != entry_hash:
                        return False
                    public_key.verify(signature, entry_json)
                    previous_hash = entry_hash
        except (KeyError, ValueError, InvalidSignature):
            return False
        return True


def audit_event(event_type, data, user_id=None):
    """Record an event on the application's audit trail."""
    current_app.extensions['audit_logger'].log_security_event(event_type, data, user_id)
