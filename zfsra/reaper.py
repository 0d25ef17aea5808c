"""
Kill processes holding files open on a ZFS mountpoint

zpool export has no portable force option, so a busy dataset keeps the pool
imported. Before exporting, every process using a mounted filesystem of the
pool is killed with fuser -k. This also kills processes that merely have a
working directory there; each kill is logged.
"""
import os
import typing

from . import config
from . import log
from .sh import ShellUtils


logger = log.setup_logger(__name__)


def parse_pids(out: str) -> typing.List[int]:
    """
    fuser prints the PIDs on stdout, access flags and the path go to stderr
    """
    pids = []
    for token in out.split():
        token = token.rstrip("cefFrmn")
        if token.isdigit():
            pids.append(int(token))
    return pids


class FuserReaper(object):
    def __init__(self, fuser=None):
        self.fuser = fuser or config.core.fuser

    def find_holders(self, mountpoint: str) -> typing.List[int]:
        # fuser -m on a plain directory reports every user of the parent filesystem
        if not os.path.ismount(mountpoint):
            logger.debug("%s is not a mount point, skipping", mountpoint)
            return []
        # rc 1 just means nobody uses the filesystem
        rc, out, err = ShellUtils.get_stdout_stderr([self.fuser, "-m", mountpoint])
        if rc != 0:
            if err and not err.rstrip().endswith(':'):
                logger.debug("fuser -m %s (rc=%d): %s", mountpoint, rc, err)
            return []
        return parse_pids(out)

    def release_handles(self, mountpoint: str) -> int:
        """
        Kill every process with open files on the filesystem mounted at mountpoint
        Returns the number of processes signaled
        """
        pids = self.find_holders(mountpoint)
        if not pids:
            return 0
        logger.warning("Killing %d process(es) using %s: %s",
                       len(pids), mountpoint, ' '.join(str(p) for p in pids))
        rc, _, err = ShellUtils.get_stdout_stderr([self.fuser, "-k", "-m", mountpoint])
        if rc != 0:
            logger.error("Failed to kill processes using %s (rc=%d): %s", mountpoint, rc, err)
        elif err:
            logger.info("fuser -k -m %s: %s", mountpoint, err)
        return len(pids)
