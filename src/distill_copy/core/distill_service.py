"""Core distill-copy service — orchestrates the generate → remap → copy flow.

The service delegates the commandlet run to a
:class:`~distill_copy.core.protocols.FileSetProvider` and the copy to a
:class:`~distill_copy.core.protocols.CopyProvider`, both injected at
construction time.  It is responsible for:

* Validating the request before anything is launched.
* Building the copy plan from the produced file set.
* Ensuring only :class:`~distill_copy.exceptions.DistillCopyError`
  subclasses escape.

Guarantees
----------
* Pure orchestration — no ``print()``, no direct filesystem access.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from distill_copy.core.models import CopyPlan, CopyProgress, CopyResult, DistillRequest
from distill_copy.core.path_remap import build_copy_plan
from distill_copy.core.protocols import CopyProvider, FileSetProvider
from distill_copy.exceptions import (
    CommandletFailedError,
    CopyFailedError,
    DistillCopyError,
    InvalidParameterError,
)
from distill_copy.utils import DEFAULT_COPY_THREADS


class DistillCopyService:
    """Stateless service that drives the distill-copy pipeline.

    Parameters
    ----------
    file_set_provider:
        Any object satisfying the :class:`FileSetProvider` protocol.
    copy_provider:
        Any object satisfying the :class:`CopyProvider` protocol.
    """

    def __init__(
        self,
        file_set_provider: FileSetProvider,
        copy_provider: CopyProvider,
    ) -> None:
        self._file_set_provider: FileSetProvider = file_set_provider
        self._copy_provider: CopyProvider = copy_provider

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def validate_request(request: DistillRequest) -> None:
        """Raise :class:`InvalidParameterError` for an unusable request."""
        if not request.maps:
            raise InvalidParameterError(
                "No maps were given.",
                hint="Pass at least one map, e.g. -Maps=Entry+Level01",
            )
        if not request.project.name:
            raise InvalidParameterError(
                f"ProjectPath must name a project file: {request.project}",
                hint="Pass the .uproject file, e.g. -ProjectPath=Game/Game.uproject",
            )
        if not request.manifest_file.name:
            raise InvalidParameterError(
                f"ManifestFile needs a full path and file name: {request.manifest_file}",
            )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def generate_file_set(self, request: DistillRequest) -> list[Path]:
        """Run the commandlet and return the distill file set.

        Raises
        ------
        InvalidParameterError
            If the request is unusable.
        CommandletFailedError
            If the provider fails unexpectedly.
        """
        self.validate_request(request)
        try:
            return self._file_set_provider.generate_file_set(request)
        except DistillCopyError:
            raise
        except Exception as exc:
            raise CommandletFailedError(
                f"Unexpected commandlet error: {exc}",
            ) from exc

    @staticmethod
    def plan_copy(
        sources: Iterable[Path],
        from_dir: Path,
        to_dir: Path,
    ) -> CopyPlan:
        """Map every source under *from_dir* to its place under *to_dir*."""
        return build_copy_plan(sources, from_dir, to_dir)

    def copy(
        self,
        plan: CopyPlan,
        *,
        threads: int = DEFAULT_COPY_THREADS,
        progress_callback: Callable[[CopyProgress], None] | None = None,
    ) -> CopyResult:
        """Copy every file in *plan*.

        Raises
        ------
        CopyFailedError
            When the copy fails for any reason.
        """
        try:
            return self._copy_provider.copy_files(
                plan,
                threads=threads,
                progress_callback=progress_callback,
            )
        except DistillCopyError:
            raise
        except Exception as exc:
            raise CopyFailedError(
                f"Unexpected copy error: {exc}",
            ) from exc

    def run(
        self,
        request: DistillRequest,
        *,
        threads: int = DEFAULT_COPY_THREADS,
        progress_callback: Callable[[CopyProgress], None] | None = None,
    ) -> CopyResult:
        """Generate the file set, plan the copy and perform it."""
        sources = self.generate_file_set(request)
        plan = self.plan_copy(sources, request.from_dir, request.to_dir)
        return self.copy(plan, threads=threads, progress_callback=progress_callback)
