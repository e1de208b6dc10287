"""
Workflow node adapter

Runs one resource/operation of the MoMo client over a batch of workflow
items. Each item is a dict of node parameters (camelCase, as entered in the
workflow editor); each output is ``{"json": ..., "paired_item": index}``.
"""

import logging
import time
from typing import Any, Dict, List

import pydantic

from .async_client import MtnMomoApiClient
from .exceptions import NodeOperationError, ValidationError
from .models import Party, RequestToPayRequest, TransferRequest

logger = logging.getLogger("mtn_momo.node")

OPERATIONS = {
    "payment": ("transfer", "requestToPay", "getStatus"),
    "account": ("getBalance", "validateAccount"),
}

DEFAULT_CURRENCY = "RWF"

_REQUIRED = object()


def _validation_error(exc: pydantic.ValidationError) -> ValidationError:
    errors = {
        ".".join(str(part) for part in err["loc"]): err["msg"] for err in exc.errors()
    }
    summary = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
    return ValidationError(f"Invalid parameters: {summary}", errors=errors)


class MtnMomoNode:
    """
    MTN MoMo workflow node

    Example:
        >>> node = MtnMomoNode(client, continue_on_fail=True)
        >>> await node.execute(
        ...     [{"phoneNumber": "250788123456", "amount": "500"}],
        ...     resource="payment",
        ...     operation="transfer",
        ... )
        [{'json': {'success': True, 'referenceId': '...', ...}, 'paired_item': 0}]
    """

    def __init__(self, client: MtnMomoApiClient, continue_on_fail: bool = False):
        self.client = client
        self.continue_on_fail = continue_on_fail

    async def execute(
        self, items: List[Dict[str, Any]], resource: str, operation: str
    ) -> List[Dict[str, Any]]:
        """
        Execute the operation for every item, in order.

        Raises:
            ValidationError: Unknown resource or operation
            NodeOperationError: An item failed and continue_on_fail is off
        """
        if operation not in OPERATIONS.get(resource, ()):
            raise ValidationError(
                f"Unsupported operation {operation!r} for resource {resource!r}"
            )

        results = []
        for index, item in enumerate(items):
            try:
                data = await self._run_item(resource, operation, item)
            except Exception as e:
                if self.continue_on_fail:
                    logger.warning("Item %d failed, continuing: %s", index, e)
                    results.append({"json": {"error": str(e)}, "paired_item": index})
                    continue
                raise NodeOperationError(f"Item {index}: {e}", item_index=index) from e

            results.append({"json": data, "paired_item": index})

        return results

    async def _run_item(self, resource: str, operation: str, item: Dict[str, Any]) -> Dict[str, Any]:
        if resource == "payment":
            if operation == "transfer":
                return await self._transfer(item)
            if operation == "requestToPay":
                return await self._request_to_pay(item)
            reference_id = self._param(item, "referenceId")
            return await self.client.get_transaction_status(reference_id)

        if operation == "getBalance":
            return await self.client.get_account_balance()

        phone_number = self._param(item, "phoneNumber")
        validation = await self.client.validate_account_holder(phone_number)
        return {
            "phoneNumber": phone_number,
            "isActive": validation.get("result") is True,
            **validation,
        }

    @staticmethod
    def _param(item: Dict[str, Any], name: str, default: Any = _REQUIRED) -> Any:
        value = item.get(name)
        if value is None or value == "":
            if default is _REQUIRED:
                raise ValidationError(
                    f"Missing required parameter: {name}", errors={name: "required"}
                )
            return default
        return value

    def _payment_fields(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "phoneNumber": str(self._param(item, "phoneNumber")),
            "amount": str(self._param(item, "amount")),
            "currency": self._param(item, "currency", DEFAULT_CURRENCY),
            "externalId": str(self._param(item, "externalId", int(time.time() * 1000))),
            "payerMessage": self._param(item, "payerMessage", None),
            "payeeNote": self._param(item, "payeeNote", None),
        }

    @staticmethod
    def _payment_output(fields: Dict[str, Any], reference_id: str, request) -> Dict[str, Any]:
        return {
            "success": True,
            "referenceId": reference_id,
            "amount": request.amount,
            "currency": request.currency,
            "phoneNumber": fields["phoneNumber"],
            "externalId": fields["externalId"],
        }

    async def _transfer(self, item: Dict[str, Any]) -> Dict[str, Any]:
        fields = self._payment_fields(item)
        try:
            request = TransferRequest(
                amount=fields["amount"],
                currency=fields["currency"],
                external_id=fields["externalId"],
                payee=Party(party_id=fields["phoneNumber"]),
                payer_message=fields["payerMessage"],
                payee_note=fields["payeeNote"],
            )
        except pydantic.ValidationError as e:
            raise _validation_error(e) from e

        reference_id = await self.client.transfer(request)
        return self._payment_output(fields, reference_id, request)

    async def _request_to_pay(self, item: Dict[str, Any]) -> Dict[str, Any]:
        fields = self._payment_fields(item)
        try:
            request = RequestToPayRequest(
                amount=fields["amount"],
                currency=fields["currency"],
                external_id=fields["externalId"],
                payer=Party(party_id=fields["phoneNumber"]),
                payer_message=fields["payerMessage"],
                payee_note=fields["payeeNote"],
            )
        except pydantic.ValidationError as e:
            raise _validation_error(e) from e

        reference_id = await self.client.request_to_pay(request)
        return self._payment_output(fields, reference_id, request)

