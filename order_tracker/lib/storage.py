"""
JSON file persistence for the order collection.

Host-side collaborator: supplies the initial collection to OrderStore
(load hook) and writes it back after every change (save hook). Records are
stored with camelCase field names, most recent first.
"""
import os
import tempfile
from pathlib import Path
from typing import Sequence, Union

from pydantic import TypeAdapter

from order_tracker.lib.logging import get_logger
from order_tracker.models.orders import Order


logger = get_logger(__name__)

_orders_adapter = TypeAdapter(list[Order])


class JsonOrderRepository:
    """Reads and writes the order collection as a JSON array."""
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
    
    def load(self) -> list[Order]:
        """
        Load the stored collection.
        
        Returns:
            Orders, most recent first; empty if the file does not exist
        
        Raises:
            pydantic.ValidationError: If the file holds malformed records
        """
        if not self.path.exists():
            logger.info("No order file found, starting empty", extra={"path": str(self.path)})
            return []
        
        orders = _orders_adapter.validate_json(self.path.read_bytes())
        logger.info("Orders loaded", extra={"path": str(self.path), "order_count": len(orders)})
        return orders
    
    def save(self, orders: Sequence[Order]) -> None:
        """Atomically replace the stored collection."""
        payload = _orders_adapter.dump_json(list(orders), by_alias=True, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            logger.error("Failed to save orders", extra={"path": str(self.path)}, exc_info=True)
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        
        logger.debug("Orders saved", extra={"path": str(self.path), "order_count": len(orders)})
