import logging
import uuid

from pydantic import ValidationError

from receipt_processor.models import Receipt
from receipt_processor.points import compute_points
from receipt_processor.store import ReceiptStore


logger = logging.getLogger(__name__)


class InvalidReceiptPayload(Exception):
    """Exception raised when a submitted body cannot be decoded into a receipt."""

    pass


class ReceiptNotFound(Exception):
    """Exception raised when no receipt is stored under the requested identifier."""

    pass


def parse_receipt(payload: bytes | str) -> Receipt:
    """Decodes a JSON payload into a `Receipt`.

    Only the shape is checked: every field must be present and hold text, and
    `items` must be a list of `{shortDescription, price}` objects. The contents
    of amounts, dates and times are left for the points rules to interpret.

    Raises:
        InvalidReceiptPayload: If the payload is not JSON or has the wrong shape.
    """
    try:
        return Receipt.model_validate_json(payload)
    except ValidationError as ex:
        raise InvalidReceiptPayload(str(ex))


async def submit_receipt(store: ReceiptStore, payload: bytes | str) -> str:
    """Decodes, identifies and stores a submitted receipt.

    Args:
        store (ReceiptStore): Where the receipt is persisted.
        payload (bytes | str): The raw JSON request body.

    Returns:
        str: The generated identifier of the stored receipt.

    Raises:
        InvalidReceiptPayload: If the payload does not describe a receipt.
        StorageError: If the store fails to persist the receipt.
    """
    receipt = parse_receipt(payload)
    receipt_id = str(uuid.uuid4())
    await store.add(receipt_id, receipt)
    logger.info(f"Stored receipt {receipt_id} from {receipt.retailer!r}")
    return receipt_id


async def get_receipt_points(store: ReceiptStore, receipt_id: str) -> int:
    """Loads a stored receipt and computes its points.

    Raises:
        ReceiptNotFound: If no receipt is stored under `receipt_id`.
        StorageError: If the store fails to load the receipt.
    """
    receipt = await store.get(receipt_id)
    if receipt is None:
        raise ReceiptNotFound(f"No receipt found for id {receipt_id}")
    points = compute_points(receipt)
    logger.info(f"Receipt {receipt_id} scored {points} points")
    return points
