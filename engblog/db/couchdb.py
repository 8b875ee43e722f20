import pycouchdb

from engblog.services.content_parser import ContentParser
from engblog.settings import Settings, settings


def get_couch(settings_obj: Settings = settings):
    """
    Create a CouchDB database handle and matching ContentParser.
    Called at runtime to avoid import-time connections.
    """
    couch = pycouchdb.Server(settings_obj.couchdb_url)
    database = couch.database(settings_obj.COUCHDB_DATABASE)
    parser = ContentParser(database)
    return database, parser
