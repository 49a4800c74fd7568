# Models package
from inventory_api.models.item import Item
