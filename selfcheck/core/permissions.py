"""Resource permission audit — which required paths are unreadable or unwritable.

Produces operator-facing lines such as:

    "data" directory is not writable
    "data/log.txt" file is not readable

One requirement yields zero, one, or two lines; output follows the order of
the requirements. An empty list means the installation is healthy.
"""

import logging
import os

from selfcheck.core.models import ResourceKind, ResourceRequirement

logger = logging.getLogger(__name__)


def _exists(req: ResourceRequirement) -> bool:
    if req.kind is ResourceKind.DIRECTORY:
        return os.path.isdir(req.path)
    return os.path.isfile(req.path)


def check_permissions(requirements: list[ResourceRequirement],
                      minimal_mode: bool = False) -> list[str]:
    """Return one diagnostic line per permission problem, in declared order.

    In minimal mode only requirements flagged `minimal` are checked.
    """
    errors: list[str] = []

    for req in requirements:
        if minimal_mode and not req.minimal:
            continue

        exists = _exists(req)
        if req.optional and not exists:
            continue

        kind = req.kind.value
        if req.must_be_readable and not (exists and os.access(req.path, os.R_OK)):
            errors.append(f'"{req.path}" {kind} is not readable')
        if req.must_be_writable and not (exists and os.access(req.path, os.W_OK)):
            errors.append(f'"{req.path}" {kind} is not writable')

    for line in errors:
        logger.warning("%s", line)
    return errors
