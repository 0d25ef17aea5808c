"""
Query and change the state of a ZFS pool through the zpool and zfs tools.

Nothing is cached: each method runs the tool again, since another node may
have imported or exported the pool since the previous call.
"""
import re
import typing
from enum import Enum

from . import config
from . import constants
from . import log
from .sh import CommandFailure, ShellUtils, is_program


logger = log.setup_logger(__name__)


class HealthStatus(Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAULTED = "faulted"
    UNKNOWN = "unknown"


_HEALTH_MAP = {
    constants.HEALTH_ONLINE: HealthStatus.HEALTHY,
    constants.HEALTH_DEGRADED: HealthStatus.DEGRADED,
    constants.HEALTH_FAULTED: HealthStatus.FAULTED,
}


def parse_health(value: typing.Optional[str]) -> HealthStatus:
    """
    Map the health column of zpool list to a HealthStatus
    Anything not listed (UNAVAIL, SUSPENDED, REMOVED, garbage) is UNKNOWN
    """
    if value is None:
        return HealthStatus.UNKNOWN
    return _HEALTH_MAP.get(value.strip(), HealthStatus.UNKNOWN)


class ZpoolDriver(object):
    """
    Thin wrapper over zpool(8) and zfs(8)
    """
    def __init__(self, zpool=None, zfs=None):
        self.zpool = zpool or config.core.zpool
        self.zfs = zfs or config.core.zfs

    def is_installed(self) -> bool:
        return is_program(self.zpool) is not None

    def is_imported(self, name: str) -> bool:
        """
        Is the pool imported on this node?
        A failing query counts as "not imported"
        """
        rc, _, err = ShellUtils.get_stdout_stderr([self.zpool, "list", "-H", name])
        if rc != 0:
            logger.debug("%s: not imported (rc=%d): %s", name, rc, err)
            return False
        return True

    def import_pool(self, name: str, options: typing.Sequence[str] = ()) -> bool:
        if self.is_imported(name):
            logger.debug("%s: already imported", name)
            return True
        logger.debug("%s: starting import", name)
        cmd = [self.zpool, "import", *options, "-o", constants.NO_CACHEFILE, name]
        rc, _, err = ShellUtils.get_stdout_stderr(cmd)
        if rc != 0:
            logger.error("%s: import failed (rc=%d): %s", name, rc, err)
            return False
        logger.debug("%s: import successful", name)
        return True

    def export_pool(self, name: str, options: typing.Sequence[str] = ()) -> bool:
        if not self.is_imported(name):
            logger.debug("%s: already exported", name)
            return True
        logger.debug("%s: starting export", name)
        rc, _, err = ShellUtils.get_stdout_stderr([self.zpool, "export", *options, name])
        if rc != 0:
            logger.error("%s: export failed (rc=%d): %s", name, rc, err)
            return False
        logger.debug("%s: export successful", name)
        return True

    def list_mountpoints(self, name: str) -> typing.List[str]:
        """
        Mountpoints of the mounted datasets of the pool

        Datasets that are not mounted (canmount=off/noauto, pools imported
        with -N) and volumes are left out: their mountpoint property names a
        plain directory, or no path at all.
        """
        cmd = [self.zfs, "list", "-H", "-r", "-o", "mountpoint,mounted", name]
        rc, out, err = ShellUtils.get_stdout_stderr(cmd)
        if rc != 0:
            logger.debug("%s: cannot list mountpoints (rc=%d): %s", name, rc, err)
            return []
        mountpoints = []
        for line in out.splitlines():
            fields = line.strip().split("\t")
            if len(fields) != 2:
                continue
            mountpoint, mounted = fields[0].strip(), fields[1].strip()
            if mountpoint in constants.MOUNTPOINT_SENTINELS or mounted != constants.MOUNTED_YES:
                continue
            mountpoints.append(mountpoint)
        return mountpoints

    def health(self, name: str) -> HealthStatus:
        rc, out, err = ShellUtils.get_stdout_stderr([self.zpool, "list", "-H", "-o", "health", name])
        if rc != 0:
            logger.debug("%s: cannot query health (rc=%d): %s", name, rc, err)
            return HealthStatus.UNKNOWN
        status = parse_health(out)
        if status is HealthStatus.UNKNOWN:
            logger.error("%s: unrecognized health '%s'", name, out)
        return status

    def can_import(self, name: str, options: typing.Sequence[str] = ()) -> bool:
        """
        Dry run of import_pool: is the pool imported already, or does zpool
        import list it among the importable pools?
        """
        if self.is_imported(name):
            return True
        rc, out, err = ShellUtils.get_stdout_stderr([self.zpool, "import", *options])
        if rc != 0:
            logger.debug("%s: no importable pools found (rc=%d): %s", name, rc, err)
            return False
        return re.search(r"^\s*pool:\s*{}\s*$".format(re.escape(name)), out, re.M) is not None

    def status_detail(self, name: str) -> str:
        try:
            return ShellUtils.get_stdout_or_raise_error([self.zpool, "status", name])
        except CommandFailure as e:
            logger.debug("%s: %s", name, e)
            return ""
