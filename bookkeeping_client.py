"""Bookkeeping API client.

This module defines a small client wrapper around the REST API served
by :mod:`bookkeeping_api`.  The client uses the ``requests`` library
internally and exposes one method per operation:

* :meth:`BookkeepingAPI.create_transaction` – record a new transaction.
* :meth:`BookkeepingAPI.list_transactions` – return every transaction.
* :meth:`BookkeepingAPI.get_transaction` – fetch one transaction by id.
* :meth:`BookkeepingAPI.update_transaction` – change selected fields.
* :meth:`BookkeepingAPI.delete_transaction` – remove a transaction.
* :meth:`BookkeepingAPI.user_summary` – totals for a single user.

Every method returns a tuple ``(data, error)``.  HTTP and connection
failures never raise; they are reported through ``error``, a
dictionary with the keys ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class BookkeepingAPI:
    """Client for interacting with the bookkeeping API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://127.0.0.1:3000``.
            api_prefix: Path prefix under which the versioned routes live.
            timeout: Per-request timeout in seconds.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + "/" + api_prefix.strip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/transactions``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = err_json.get("detail") or err_json.get("message") or str(err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _transaction_path(transaction_id: Any) -> str:
        return f"/transactions/{quote(str(transaction_id), safe='')}"

    # ------------------------------------------------------------------
    # Transaction operations
    # ------------------------------------------------------------------
    def create_transaction(
        self,
        user: str,
        item: str,
        amount: float,
        timestamp: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Record a new transaction and return it as stored by the server."""
        payload: Dict[str, Any] = {"user": user, "item": item, "amount": amount}
        if timestamp is not None:
            payload["timestamp"] = timestamp
        return self._request("POST", "/transactions", json_body=payload)

    def list_transactions(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all transactions.

        Returns:
            A tuple ``(transactions, error)``. ``transactions`` is empty
            on failure.
        """
        data, error = self._request("GET", "/transactions")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_transaction(self, transaction_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", self._transaction_path(transaction_id))

    def update_transaction(
        self, transaction_id: Any, **fields: Any
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update the given fields of a transaction.

        Only keyword arguments that are passed are sent, so omitted
        fields keep their stored values.
        """
        return self._request("PUT", self._transaction_path(transaction_id), json_body=fields)

    def delete_transaction(self, transaction_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a transaction.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", self._transaction_path(transaction_id))
        return error is None, error

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def user_summary(self, user: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return ``{user, count, total_amount, records}`` for ``user``."""
        return self._request("GET", f"/users/{quote(user, safe='')}/summary")

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/health")
