# import all models so Base.metadata sees them
from solartrack.db.models.kv_entry import KeyValueEntry
