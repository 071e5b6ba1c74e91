"""
Saved Application Storage

Each application is written twice:
    application:<id>       full record
    application:list:<id>  {id, name, company, position, createdAt} for listing

Both keys are written and deleted together.
"""
import json
import logging
import uuid

from django.utils import timezone

from core.kv import get_kv_store

logger = logging.getLogger(__name__)

RECORD_KEY = 'application:{}'
INDEX_PREFIX = 'application:list:'
INDEX_KEY = INDEX_PREFIX + '{}'


def _index_entry(application):
    job_details = application.get('jobDetails') or {}
    return {
        'id': application['id'],
        'name': application['name'],
        'company': job_details.get('company', ''),
        'position': job_details.get('position', ''),
        'createdAt': application['createdAt'],
    }


class ApplicationService:
    """CRUD over saved cover-letter applications."""

    def __init__(self, store=None):
        self.store = store or get_kv_store()

    def _save(self, application):
        self.store.put(RECORD_KEY.format(application['id']), json.dumps(application))
        self.store.put(INDEX_KEY.format(application['id']), json.dumps(_index_entry(application)))

    def create(self, name, job_details, generated_content):
        now = timezone.now().isoformat()
        application = {
            'id': str(uuid.uuid4()),
            'name': name,
            'jobDetails': job_details,
            'generatedContent': generated_content,
            'createdAt': now,
            'updatedAt': now,
        }
        self._save(application)
        logger.info(f"Saved application {application['id']} ({name})")
        return application

    def list(self):
        """Index entries, newest first."""
        applications = []
        for key in self.store.list_keys(INDEX_PREFIX):
            raw = self.store.get(key)
            if raw:
                applications.append(json.loads(raw))
        applications.sort(key=lambda item: item.get('createdAt', ''), reverse=True)
        return applications

    def get(self, application_id):
        raw = self.store.get(RECORD_KEY.format(application_id))
        return json.loads(raw) if raw else None

    def update(self, application_id, name=None, job_details=None, generated_content=None):
        """Update the given fields; returns None when the application does not exist."""
        application = self.get(application_id)
        if application is None:
            return None

        if name is not None:
            application['name'] = name
        if job_details is not None:
            application['jobDetails'] = job_details
        if generated_content is not None:
            application['generatedContent'] = generated_content
        application['updatedAt'] = timezone.now().isoformat()

        self._save(application)
        return application

    def delete(self, application_id):
        self.store.delete(RECORD_KEY.format(application_id))
        self.store.delete(INDEX_KEY.format(application_id))
        logger.info(f"Deleted application {application_id}")
