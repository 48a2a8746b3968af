"""
MongoDB access for the contact API.

``MongoStore`` owns the Motor client for the lifetime of the application and
exposes typed operations over the two collections it serves: contact
submissions (read/write) and education records (read-only).
"""

import logging
from typing import List, Optional, Tuple

import motor.motor_asyncio
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from portfolio_api.core.config import Settings
from portfolio_api.core.errors import ConfigurationError, DependencyError
from portfolio_api.models.contact import ContactSubmission
from portfolio_api.models.education import EducationRecord

# Set up logger
logger = logging.getLogger(__name__)


def mask_mongo_uri(uri: str) -> str:
    """Mask the password in a connection string for logging"""
    if "@" not in uri or "://" not in uri:
        return uri
    scheme, rest = uri.split("://", 1)
    credentials, host_part = rest.rsplit("@", 1)
    if ":" not in credentials:
        return uri
    user, password = credentials.split(":", 1)
    return f"{scheme}://{user}:{'*' * len(password)}@{host_part}"


def split_database_name(uri: str) -> Tuple[str, str]:
    """
    Split a MongoDB URI into the server URI and the database name.

    The database is selected after connecting so that authentication happens
    against the server rather than the target database.

    Returns:
        tuple: (connection_uri, db_name), keeping any query string on the connection URI

    Raises:
        ConfigurationError: if the URI does not include a database name
    """
    scheme_sep = uri.find("://")
    path_start = uri.find("/", scheme_sep + 3 if scheme_sep != -1 else 0)
    if path_start == -1:
        raise ConfigurationError(
            "Database name not found in MongoDB URI. Please ensure your MONGODB_URL includes the database name."
        )

    path, _, query = uri[path_start + 1:].partition("?")
    db_name = path.strip()
    if not db_name:
        raise ConfigurationError(
            "Database name not found in MongoDB URI. Please ensure your MONGODB_URL includes the database name."
        )

    connection_uri = uri[:path_start] + "/"
    if query:
        connection_uri += "?" + query
    return connection_uri, db_name


class MongoStore:
    """Persistence service for contact submissions and education records."""

    def __init__(self, uri: str, contacts_collection: str = "contacts",
                 education_collection: str = "education"):
        self.uri = uri
        self.contacts_collection = contacts_collection
        self.education_collection = education_collection
        self.client = None
        self.db = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoStore":
        try:
            uri = settings.effective_mongo_uri
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        return cls(
            uri,
            contacts_collection=settings.contacts_collection,
            education_collection=settings.education_collection,
        )

    def connect(self):
        logger.info(f"MongoDB URI configured: {mask_mongo_uri(self.uri)}")
        connection_uri, db_name = split_database_name(self.uri)

        logger.info(f"Connecting to MongoDB server: {mask_mongo_uri(connection_uri)}")
        self.client = motor.motor_asyncio.AsyncIOMotorClient(
            connection_uri,
            tz_aware=True,
            maxPoolSize=10,              # Limit to 10 connections max
            minPoolSize=2,
            maxIdleTimeMS=30000,         # Close idle connections after 30 seconds
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000
        )
        self.db = self.client[db_name]
        logger.info(f"MongoDB client ready for database: {db_name}")

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connections closed successfully")
            self.client = None

    @property
    def contacts(self):
        return self.db[self.contacts_collection]

    @property
    def education(self):
        return self.db[self.education_collection]

    async def create_contact(self, submission: ContactSubmission) -> ContactSubmission:
        try:
            result = await self.contacts.insert_one(submission.to_document())
        except PyMongoError as e:
            raise DependencyError(reason=f"insert into '{self.contacts_collection}' failed: {e}") from e

        saved = submission.model_copy(update={"id": str(result.inserted_id)})
        logger.info(f"✅ Saved contact {saved.id} from {saved.email}")
        return saved

    async def list_contacts(self) -> List[ContactSubmission]:
        try:
            cursor = self.contacts.find({}).sort("createdAt", DESCENDING)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise DependencyError(reason=f"listing '{self.contacts_collection}' failed: {e}") from e
        return [ContactSubmission.from_document(doc) for doc in documents]

    async def get_contact(self, contact_id: str) -> Optional[ContactSubmission]:
        """Return the contact with this id, or None if it is absent or the id is malformed"""
        if not ObjectId.is_valid(contact_id):
            return None
        try:
            doc = await self.contacts.find_one({"_id": ObjectId(contact_id)})
        except PyMongoError as e:
            raise DependencyError(reason=f"lookup of contact {contact_id} failed: {e}") from e
        return ContactSubmission.from_document(doc) if doc else None

    async def delete_contact(self, contact_id: str) -> bool:
        """Delete a contact, returning False when nothing matched"""
        if not ObjectId.is_valid(contact_id):
            return False
        try:
            result = await self.contacts.delete_one({"_id": ObjectId(contact_id)})
        except PyMongoError as e:
            raise DependencyError(reason=f"delete of contact {contact_id} failed: {e}") from e

        if result.deleted_count > 0:
            logger.info(f"🗑️ Deleted contact: {contact_id}")
            return True
        return False

    async def list_education(self) -> List[EducationRecord]:
        try:
            documents = await self.education.find({}).to_list(length=None)
        except PyMongoError as e:
            raise DependencyError(reason=f"listing '{self.education_collection}' failed: {e}") from e
        return [EducationRecord.from_document(doc) for doc in documents]
