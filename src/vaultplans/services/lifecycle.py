"""LifecycleManager — create, transition, list, and age out technical plans.

State lives in two places only: which folder holds a plan (inbox, reviewed,
archive) and the plan's frontmatter. All I/O goes through a
:class:`VaultGateway`; all metadata encoding through a :class:`MetadataCodec`.

Moves are two-phase because the vault has no rename:

1. write the destination copy;
2. delete the source copy.

A failure in phase 1 changes nothing. A failure in phase 2 leaves a
duplicate (both copies present) and is reported as ``OPERATION_FAILED``
with ``detail.duplicate``; the document is never lost. A source that is
already gone in phase 2 counts as success. Listings collapse duplicates to
the most terminal copy.

Calls are sequential and unsynchronized: the manager assumes it is the only
writer to its folders.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from vaultplans.domain.codec import CodecError, LineFrontmatterCodec, MetadataCodec
from vaultplans.domain.ids import is_plan_document, is_technical_plan, plan_filename
from vaultplans.domain.lifecycle import (
    PlanFolders,
    PlanState,
    PlanSummary,
    is_valid_transition,
    resolve_duplicates,
)
from vaultplans.domain.metadata import (
    PlanPriority,
    PlanSource,
    PlanType,
    merge_metadata,
    validate_metadata,
)
from vaultplans.infrastructure.gateway import GatewayError, VaultFileNotFoundError
from vaultplans.services._helpers import basename, operation_context, parse_iso_date, today_utc
from vaultplans.services.result import ServiceResult

if TYPE_CHECKING:
    from vaultplans.infrastructure.gateway import VaultGateway

logger = logging.getLogger(__name__)

# Where a plan may currently sit when it is archived, in search order.
_ARCHIVE_SOURCES = (PlanState.INBOX, PlanState.REVIEWED)


class LifecycleManager:
    """Three-folder state machine over a remote vault.

    Args:
        gateway: Remote vault access.
        folders: Managed folder layout (defaults to ``Technical Plans/...``).
        codec: Frontmatter codec (defaults to the line-oriented codec).
        today: Clock returning the current date (UTC by default).
    """

    def __init__(
        self,
        gateway: VaultGateway,
        *,
        folders: PlanFolders | None = None,
        codec: MetadataCodec | None = None,
        today: Callable[[], date] = today_utc,
    ) -> None:
        self._gateway = gateway
        self.folders = folders or PlanFolders()
        self._codec = codec or LineFrontmatterCodec()
        self._today = today

    def _today_iso(self) -> str:
        return self._today().isoformat()

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------

    def status(self) -> ServiceResult:
        """Check that the vault server is reachable."""
        op = "ping"
        try:
            payload = self._gateway.get_status()
        except GatewayError as exc:
            return _operation_failed(op, "connect to Obsidian", exc)

        versions = payload.get("versions") or {}
        manifest = payload.get("manifest") or {}
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "obsidian": versions.get("obsidian"),
                "plugin": manifest.get("name"),
                "plugin_version": manifest.get("version"),
                "authenticated": payload.get("authenticated"),
            },
        )

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def initialize_structure(self) -> ServiceResult:
        """Ensure each managed folder exists by writing an empty marker file.

        Idempotent: folders that already contain anything are left alone.
        Failures are reported in the result but never raised.
        """
        op = "initialize_structure"
        with operation_context(op):
            try:
                files = list(self._gateway.list_files())
            except GatewayError as exc:
                logger.warning("Cannot list vault files: %s", exc)
                return ServiceResult.failure(
                    op,
                    "INIT_FAILED",
                    f"Failed to initialize plan folders: {exc}",
                    detail={"cause": str(exc)},
                )

            created: list[str] = []
            existing: list[str] = []
            failures: list[str] = []
            for state, folder in self.folders.all():
                if any(f == folder or f.startswith(f"{folder}/") for f in files):
                    existing.append(folder)
                    continue
                marker = self.folders.marker_path(state)
                try:
                    self._gateway.create_or_update_file(marker, "")
                except GatewayError as exc:
                    logger.warning("Cannot create folder marker %s: %s", marker, exc)
                    failures.append(f"{marker}: {exc}")
                    continue
                logger.debug("Created folder marker %s", marker)
                created.append(marker)

        data = {"created": created, "existing": existing}
        if failures:
            return ServiceResult.failure(
                op,
                "INIT_FAILED",
                f"Failed to initialize plan folders: {'; '.join(failures)}",
                detail={"failures": failures},
                data=data,
            )
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_technical_plan(
        self,
        body: str,
        metadata: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Write a new plan into the inbox.

        *metadata* is merged over the defaults (priority Medium, type Design,
        source Other LLM, created today). A plan with the same day, project,
        and type already in the inbox is overwritten.
        """
        op = "create_technical_plan"
        today = self._today_iso()
        merged = merge_metadata(today, metadata)

        errors = validate_metadata(merged)
        if errors:
            return ServiceResult.failure(
                op,
                "VALIDATION_FAILED",
                f"Invalid plan metadata: {'; '.join(errors)}",
                detail={"errors": errors},
            )

        filename = plan_filename(today, merged["project"], merged["type"])
        path = self.folders.path(PlanState.INBOX, filename)
        with operation_context(op, filename=filename):
            try:
                self._gateway.create_or_update_file(path, self._codec.generate(merged) + body)
            except GatewayError as exc:
                return _operation_failed(op, "create plan", exc, path=path)
            logger.debug("Created plan %s", path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": path,
                "filename": filename,
                "state": str(PlanState.INBOX),
                "metadata": merged,
            },
        )

    def file_document(self, path: str, content: str) -> ServiceResult:
        """Write *content* to *path*, diverting plan-like content to the inbox.

        Content that reads like a technical plan and is not already under the
        plans root becomes a new plan named after the file's stem. Everything
        else is written to *path* verbatim.
        """
        op = "file_document"
        if is_technical_plan(content) and not self.folders.contains(path):
            stem = basename(path).replace(".md", "", 1) or "Unnamed"
            result = self.create_technical_plan(
                content,
                {
                    "source": PlanSource.OTHER_LLM,
                    "type": PlanType.DESIGN,
                    "project": stem,
                    "priority": PlanPriority.MEDIUM,
                },
            )
            return result.model_copy(update={"op": op, "data": {**result.data, "routed": True}})

        with operation_context(op, path=path):
            try:
                self._gateway.create_or_update_file(path, content)
            except GatewayError as exc:
                return _operation_failed(op, "create/update file", exc, path=path)
        return ServiceResult(ok=True, op=op, data={"path": path, "routed": False})

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def mark_reviewed(self, filename: str) -> ServiceResult:
        """Move a plan from the inbox to reviewed, stamping ``review_date``.

        Only the inbox is consulted; a plan sitting anywhere else is
        NOT_FOUND. All other metadata and the body are carried over as-is.
        """
        op = "mark_reviewed"
        source = self.folders.path(PlanState.INBOX, filename)
        with operation_context(op, filename=filename):
            try:
                text = self._gateway.get_file(source)
            except VaultFileNotFoundError:
                return ServiceResult.failure(
                    op,
                    "NOT_FOUND",
                    f"Plan not found in Inbox: {filename}",
                    detail={"filename": filename},
                )
            except GatewayError as exc:
                return _operation_failed(op, "mark plan as reviewed", exc, path=source)

            warnings: list[str] = []
            metadata, body = self._decode(text, source, warnings)
            review_date = self._today_iso()
            metadata["review_date"] = review_date
            updated = self._codec.generate(metadata) + body

            return self._relocate(
                op,
                filename,
                PlanState.INBOX,
                PlanState.REVIEWED,
                updated,
                action="mark plan as reviewed",
                extra={"review_date": review_date},
                warnings=warnings,
            )

    def archive_plan(self, filename: str) -> ServiceResult:
        """Move a plan from the inbox or reviewed into the archive, verbatim.

        The inbox is searched first, then reviewed. NOT_FOUND if the plan is
        in neither; nothing is written in that case.
        """
        op = "archive_plan"
        with operation_context(op, filename=filename):
            for state in _ARCHIVE_SOURCES:
                source = self.folders.path(state, filename)
                try:
                    text = self._gateway.get_file(source)
                except VaultFileNotFoundError:
                    continue
                except GatewayError as exc:
                    return _operation_failed(op, "archive plan", exc, path=source)
                return self._relocate(
                    op,
                    filename,
                    state,
                    PlanState.ARCHIVE,
                    text,
                    action="archive plan",
                )

        return ServiceResult.failure(
            op,
            "NOT_FOUND",
            f"Plan not found in Inbox or Reviewed: {filename}",
            detail={"filename": filename},
        )

    def move_plan(self, filename: str, target: str) -> ServiceResult:
        """Advance a plan to *target* along the lifecycle.

        The plan's current state is its most terminal copy. Backward moves and
        moves out of the archive are rejected with INVALID_TRANSITION.
        Reviewing goes through :meth:`mark_reviewed` so ``review_date`` is
        always stamped; archiving moves that most terminal copy verbatim.
        """
        op = "move_plan"
        try:
            target_state = PlanState(target.lower())
        except ValueError:
            return _unknown_folder(op, target)

        current: PlanState | None = None
        text = ""
        with operation_context(op, filename=filename, target=str(target_state)):
            for state in reversed(PlanState):
                path = self.folders.path(state, filename)
                try:
                    text = self._gateway.get_file(path)
                except VaultFileNotFoundError:
                    continue
                except GatewayError as exc:
                    return _operation_failed(op, "move plan", exc, path=path)
                current = state
                break

        if current is None:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"Plan not found in Technical Plans: {filename}",
                detail={"filename": filename},
            )
        if not is_valid_transition(current, target_state):
            return ServiceResult.failure(
                op,
                "INVALID_TRANSITION",
                f"Cannot move plan from {current} to {target_state}",
                detail={"filename": filename, "from": str(current), "to": str(target_state)},
            )

        if target_state is PlanState.REVIEWED:
            return self.mark_reviewed(filename).model_copy(update={"op": op})
        # Archive the most terminal copy found above.
        with operation_context(op, filename=filename, target=str(target_state)):
            return self._relocate(
                op, filename, current, PlanState.ARCHIVE, text, action="archive plan"
            )

    def _relocate(
        self,
        op: str,
        filename: str,
        source_state: PlanState,
        target_state: PlanState,
        content: str,
        *,
        action: str,
        extra: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Two-phase move: write destination, then delete source."""
        source = self.folders.path(source_state, filename)
        target = self.folders.path(target_state, filename)

        try:
            self._gateway.create_or_update_file(target, content)
        except GatewayError as exc:
            return _operation_failed(op, action, exc, path=target, phase="write")

        try:
            self._gateway.delete_file(source)
        except VaultFileNotFoundError:
            logger.debug("Source %s already gone", source)
        except GatewayError as exc:
            logger.warning("Plan %s left in both %s and %s", filename, source, target)
            return _operation_failed(
                op,
                action,
                exc,
                path=source,
                phase="delete",
                duplicate=True,
                copies=[source, target],
            )

        logger.debug("Moved %s -> %s", source, target)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "filename": filename,
                "path": target,
                "source": source,
                "state": str(target_state),
                **(extra or {}),
            },
            warnings=warnings or [],
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_technical_plans(self, folder: str | None = None) -> ServiceResult:
        """List plans in one folder, or in all three.

        Folders that cannot be listed contribute nothing. Plans that cannot
        be read are still listed, without metadata. Copies of the same plan
        in several folders are collapsed to the most terminal one.
        """
        op = "list_technical_plans"
        if folder is None:
            states = list(PlanState)
        else:
            try:
                states = [PlanState(folder.lower())]
            except ValueError:
                return _unknown_folder(op, folder)

        warnings: list[str] = []
        with operation_context(op):
            plans = self._collect(states, warnings)
        kept, shadowed = resolve_duplicates(plans)
        for plan in shadowed:
            warnings.append(f"Duplicate plan {plan.filename} shadowed at {plan.path}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": [plan.to_dict() for plan in kept],
                "count": len(kept),
                "duplicates": [plan.path for plan in shadowed],
            },
            warnings=warnings,
        )

    def get_plan_metadata(self, filename: str) -> ServiceResult:
        """Metadata of the first copy found (inbox, reviewed, archive).

        ``data.metadata`` is None when no folder holds the plan.
        """
        op = "get_plan_metadata"
        warnings: list[str] = []
        with operation_context(op, filename=filename):
            for state, _folder in self.folders.all():
                path = self.folders.path(state, filename)
                try:
                    text = self._gateway.get_file(path)
                except VaultFileNotFoundError:
                    continue
                except GatewayError as exc:
                    logger.warning("Cannot read %s: %s", path, exc)
                    warnings.append(f"Could not read {path}: {exc}")
                    continue
                try:
                    metadata, _body = self._codec.parse(text)
                except CodecError as exc:
                    warnings.append(f"Could not decode {path}: {exc}")
                    continue
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={
                        "filename": filename,
                        "path": path,
                        "state": str(state),
                        "metadata": metadata,
                    },
                    warnings=warnings,
                )

        return ServiceResult(
            ok=True,
            op=op,
            data={"filename": filename, "path": None, "state": None, "metadata": None},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Aging
    # ------------------------------------------------------------------

    def archive_old_reviewed(self, days_old: int) -> ServiceResult:
        """Archive reviewed plans whose ``review_date`` is older than *days_old* days.

        Plans without a parseable ``review_date`` are never archived. Stops at
        the first failed archive; plans archived before it stay archived.
        """
        op = "archive_old_reviewed"
        if days_old < 0:
            return ServiceResult.failure(
                op,
                "VALIDATION_FAILED",
                f"days_old must be >= 0, got {days_old}",
            )

        cutoff = self._today() - timedelta(days=days_old)
        warnings: list[str] = []
        archived: list[str] = []
        with operation_context(op, cutoff=cutoff.isoformat()):
            for plan in self._collect([PlanState.REVIEWED], warnings):
                reviewed_on = parse_iso_date((plan.metadata or {}).get("review_date"))
                if reviewed_on is None or reviewed_on >= cutoff:
                    continue
                result = self.archive_plan(plan.filename)
                if not result.ok:
                    err = result.error
                    return ServiceResult.failure(
                        op,
                        err.code if err else "OPERATION_FAILED",
                        f"Failed to archive old reviewed plans: {err.message if err else result.op}",
                        detail=err.detail if err else {},
                        data={"count": len(archived), "archived": archived},
                        warnings=warnings + result.warnings,
                    )
                archived.append(plan.filename)

        logger.debug("Archived %d reviewed plan(s) older than %s", len(archived), cutoff)
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(archived), "archived": archived, "cutoff": cutoff.isoformat()},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _collect(self, states: list[PlanState], warnings: list[str]) -> list[PlanSummary]:
        plans: list[PlanSummary] = []
        for state in states:
            folder = self.folders.folder(state)
            try:
                entries = self._gateway.list_directory(folder)
            except GatewayError as exc:
                logger.debug("Folder %s not listable: %s", folder, exc)
                continue

            for entry in entries:
                if not is_plan_document(entry, marker=self.folders.marker):
                    continue
                filename = basename(entry)
                path = f"{folder}/{filename}"
                metadata: dict[str, str] | None = None
                try:
                    metadata, _body = self._codec.parse(self._gateway.get_file(path))
                except (GatewayError, CodecError) as exc:
                    logger.warning("Cannot read plan %s: %s", path, exc)
                    warnings.append(f"Could not read {path}: {exc}")
                plans.append(
                    PlanSummary(path=path, filename=filename, state=state, metadata=metadata)
                )
        return plans

    def _decode(
        self, text: str, path: str, warnings: list[str]
    ) -> tuple[dict[str, str], str]:
        try:
            return self._codec.parse(text)
        except CodecError as exc:
            logger.warning("Cannot decode %s, treating as no metadata: %s", path, exc)
            warnings.append(f"Could not decode {path}: {exc}")
            return {}, text


def _operation_failed(
    op: str,
    action: str,
    exc: GatewayError,
    *,
    path: str | None = None,
    **detail: Any,
) -> ServiceResult:
    logger.warning("Failed to %s: %s", action, exc)
    return ServiceResult.failure(
        op,
        "OPERATION_FAILED",
        f"Failed to {action}: {exc}",
        detail={"path": path or exc.path, "cause": str(exc), **detail},
    )


def _unknown_folder(op: str, folder: str) -> ServiceResult:
    choices = ", ".join(str(state) for state in PlanState)
    return ServiceResult.failure(
        op,
        "VALIDATION_FAILED",
        f"Unknown folder {folder!r}; expected one of: {choices}",
    )
