"""
Field-level comparison of two versions of the same endpoint.
"""

from typing import Optional

from changelog_hub.engine import rules
from changelog_hub.models.change import Change, ChangeCategory, ChangeType
from changelog_hub.models.snapshot import Endpoint, Parameter, RequestBody, Response


def _index_parameters(parameters: list[Parameter]) -> dict[str, Parameter]:
    indexed: dict[str, Parameter] = {}
    for param in parameters:
        indexed.setdefault(param.name, param)
    return indexed


def _index_responses(responses: list[Response]) -> dict[str, Response]:
    indexed: dict[str, Response] = {}
    for response in responses:
        indexed.setdefault(response.status_code, response)
    return indexed


class EndpointComparator:
    """
    Compare an endpoint present in both snapshots.

    Parameters are matched by name and responses by status code. Changes
    are emitted in the order: parameters, request body, responses,
    deprecation.
    """

    def compare(self, old: Endpoint, new: Endpoint, key: str) -> list[Change]:
        """
        Compare two versions of an endpoint.

        Args:
            old: The endpoint in the old snapshot.
            new: The endpoint in the new snapshot.
            key: Identity of the endpoint, used as path prefix.

        Returns:
            Changes in emission order (unsorted).
        """
        changes: list[Change] = []
        changes.extend(self.compare_parameters(old.parameters, new.parameters, key))
        changes.extend(self.compare_request_body(old.request_body, new.request_body, key))
        changes.extend(self.compare_responses(old.responses, new.responses, key))
        changes.extend(self.compare_deprecation(old, new, key))
        return changes

    def compare_parameters(
        self,
        old_params: list[Parameter],
        new_params: list[Parameter],
        key: str,
    ) -> list[Change]:
        changes: list[Change] = []
        old_by_name = _index_parameters(old_params)
        new_by_name = _index_parameters(new_params)

        for name, param in old_by_name.items():
            if name not in new_by_name:
                requirement = "required" if param.required else "optional"
                changes.append(rules.make_change(
                    ChangeType.REMOVED,
                    ChangeCategory.PARAMETER,
                    rules.parameter_removed(param.required),
                    f"{key}.parameters.{name}",
                    f"Removed {requirement} parameter '{name}' from {key}",
                    old_value=param.type,
                    subject=name,
                ))

        for name, param in new_by_name.items():
            if name not in old_by_name:
                requirement = "required" if param.required else "optional"
                changes.append(rules.make_change(
                    ChangeType.ADDED,
                    ChangeCategory.PARAMETER,
                    rules.parameter_added(param.required),
                    f"{key}.parameters.{name}",
                    f"Added {requirement} parameter '{name}' to {key}",
                    new_value=param.type,
                    subject=name,
                ))

        for name, new_param in new_by_name.items():
            old_param = old_by_name.get(name)
            if old_param is not None:
                changes.extend(self._compare_parameter(old_param, new_param, key))

        return changes

    def _compare_parameter(self, old: Parameter, new: Parameter, key: str) -> list[Change]:
        changes: list[Change] = []
        path = f"{key}.parameters.{new.name}"

        if old.type != new.type:
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.PARAMETER,
                rules.parameter_type_changed(),
                f"{path}.type",
                f"Parameter '{new.name}' type changed from {old.type} to {new.type}",
                old_value=old.type,
                new_value=new.type,
                subject=new.name,
            ))

        if old.required != new.required:
            state = "required" if new.required else "optional"
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.PARAMETER,
                rules.required_flag_changed(old.required, new.required),
                f"{path}.required",
                f"Parameter '{new.name}' is now {state}",
                old_value=old.required,
                new_value=new.required,
                subject=new.name,
            ))

        if old.location != new.location:
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.PARAMETER,
                rules.parameter_location_changed(),
                f"{path}.location",
                f"Parameter '{new.name}' moved from {old.location.value} to {new.location.value}",
                old_value=old.location.value,
                new_value=new.location.value,
                subject=new.name,
            ))

        return changes

    def compare_request_body(
        self,
        old: Optional[RequestBody],
        new: Optional[RequestBody],
        key: str,
    ) -> list[Change]:
        path = f"{key}.requestBody"

        if new is None and old is None:
            return []

        if old is None and new is not None:
            requirement = "required" if new.required else "optional"
            return [rules.make_change(
                ChangeType.ADDED,
                ChangeCategory.REQUEST_BODY,
                rules.request_body_added(new.required),
                path,
                f"Added {requirement} request body to {key}",
                new_value=new.schema_ref,
            )]

        if new is None:
            return [rules.make_change(
                ChangeType.REMOVED,
                ChangeCategory.REQUEST_BODY,
                rules.request_body_removed(),
                path,
                f"Removed request body from {key}",
                old_value=old.schema_ref,
            )]

        changes: list[Change] = []
        if old.content_type != new.content_type:
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.REQUEST_BODY,
                rules.request_body_content_type_changed(),
                f"{path}.contentType",
                f"Request body content type changed from {old.content_type} to {new.content_type}",
                old_value=old.content_type,
                new_value=new.content_type,
            ))

        if old.required != new.required:
            state = "required" if new.required else "optional"
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.REQUEST_BODY,
                rules.required_flag_changed(old.required, new.required),
                f"{path}.required",
                f"Request body of {key} is now {state}",
                old_value=old.required,
                new_value=new.required,
                subject="request body",
            ))

        if old.schema_ref != new.schema_ref:
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.REQUEST_BODY,
                rules.request_body_schema_changed(),
                f"{path}.schema",
                f"Request body schema changed from {old.schema_ref} to {new.schema_ref}",
                old_value=old.schema_ref,
                new_value=new.schema_ref,
            ))

        return changes

    def compare_responses(
        self,
        old_responses: list[Response],
        new_responses: list[Response],
        key: str,
    ) -> list[Change]:
        changes: list[Change] = []
        old_by_code = _index_responses(old_responses)
        new_by_code = _index_responses(new_responses)

        for code, response in old_by_code.items():
            if code not in new_by_code:
                changes.append(rules.make_change(
                    ChangeType.REMOVED,
                    ChangeCategory.RESPONSE,
                    rules.response_removed(response),
                    f"{key}.responses.{code}",
                    f"Removed response {code} from {key}",
                    old_value=response.schema_ref,
                ))

        for code, response in new_by_code.items():
            if code not in old_by_code:
                changes.append(rules.make_change(
                    ChangeType.ADDED,
                    ChangeCategory.RESPONSE,
                    rules.response_added(),
                    f"{key}.responses.{code}",
                    f"Added response {code} to {key}",
                    new_value=response.schema_ref,
                ))

        for code, new_response in new_by_code.items():
            old_response = old_by_code.get(code)
            if old_response is None:
                continue

            if old_response.schema_ref != new_response.schema_ref:
                changes.append(rules.make_change(
                    ChangeType.MODIFIED,
                    ChangeCategory.RESPONSE,
                    rules.response_schema_changed(),
                    f"{key}.responses.{code}.schema",
                    f"Response {code} schema changed from "
                    f"{old_response.schema_ref} to {new_response.schema_ref}",
                    old_value=old_response.schema_ref,
                    new_value=new_response.schema_ref,
                ))

            if old_response.content_type != new_response.content_type:
                changes.append(rules.make_change(
                    ChangeType.MODIFIED,
                    ChangeCategory.RESPONSE,
                    rules.response_content_type_changed(),
                    f"{key}.responses.{code}.contentType",
                    f"Response {code} content type changed from "
                    f"{old_response.content_type} to {new_response.content_type}",
                    old_value=old_response.content_type,
                    new_value=new_response.content_type,
                ))

        return changes

    def compare_deprecation(self, old: Endpoint, new: Endpoint, key: str) -> list[Change]:
        if old.deprecated == new.deprecated:
            return []

        if new.deprecated:
            return [rules.make_change(
                ChangeType.DEPRECATED,
                ChangeCategory.ENDPOINT,
                rules.deprecation_changed(old.deprecated, new.deprecated),
                f"{key}.deprecated",
                f"Endpoint {key} is now deprecated",
                old_value=False,
                new_value=True,
            )]

        return [rules.make_change(
            ChangeType.MODIFIED,
            ChangeCategory.ENDPOINT,
            rules.deprecation_changed(old.deprecated, new.deprecated),
            f"{key}.deprecated",
            f"Endpoint {key} is no longer deprecated",
            old_value=True,
            new_value=False,
        )]
