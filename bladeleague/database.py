from databases import Database

from bladeleague.config import config

database = Database(config.database_url)
