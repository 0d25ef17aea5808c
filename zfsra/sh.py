"""Run external commands.

Everything the agent learns about the pool comes from running zpool, zfs and
fuser on the local host. Commands are always passed as argv lists, so pool
names and user supplied import/export arguments are never re-parsed by a shell.

ShellUtils returns the raw return code together with the decoded output and
leaves the interpretation to the caller. get_stdout_or_raise_error is the
variant for callers that treat any non-zero return code as an error.
"""
import logging
import os
import subprocess
import typing

from . import constants


logger = logging.getLogger(__name__)


class Error(ValueError):
    def __init__(self, msg, cmd):
        super().__init__(msg)
        self.cmd = cmd


class CommandFailure(Error):
    def __init__(self, cmd: typing.Sequence[str], rc: int, msg: str):
        super().__init__("Failed to run '{}' (rc={}): {}".format(' '.join(cmd), rc, msg), cmd)
        self.rc = rc


class Utils:
    @staticmethod
    def decode_str(x: bytes):
        try:
            return x.decode('utf-8')
        except UnicodeDecodeError as e:
            logger.debug('UTF-8 decode failure', exc_info=e)
            return x.decode('utf-8', errors='backslashreplace')


def is_program(prog):
    """
    Is this program available? Returns its full path or None

    The sbin dirs are searched after PATH, which is often minimal when the
    cluster manager runs the agent.
    """
    def isexec(filename):
        return os.path.isfile(filename) and os.access(filename, os.X_OK)
    if os.path.isabs(prog):
        return prog if isexec(prog) else None
    paths = os.getenv("PATH", os.defpath).split(os.pathsep)
    paths.extend(constants.PROGRAM_DIRS)
    for p in paths:
        f = os.path.join(p, prog)
        if isexec(f):
            return f
    return None


class ShellUtils:
    @classmethod
    def get_stdout_stderr(cls, cmd: typing.Sequence[str]) -> typing.Tuple[int, str, str]:
        '''
        Run a cmd, return (rc, stdout, stderr)

        A command that cannot be executed at all is reported like a shell
        would report it, with rc 127 and the OS error as stderr.
        '''
        logger.debug("invoke: %s", ' '.join(cmd))
        try:
            proc = subprocess.run(
                list(cmd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.debug("failed to execute %s: %s", cmd[0], e)
            return constants.RC_NOT_FOUND, "", str(e)
        return proc.returncode, Utils.decode_str(proc.stdout).strip(), Utils.decode_str(proc.stderr).strip()

    @classmethod
    def get_stdout_or_raise_error(
            cls,
            cmd: typing.Sequence[str],
            success_exit_status: typing.Optional[typing.Set[int]] = None,
    ) -> str:
        rc, stdout, stderr = cls.get_stdout_stderr(cmd)
        if success_exit_status is None:
            success_exit_status = {0}
        if rc not in success_exit_status:
            raise CommandFailure(cmd, rc, stderr)
        return stdout
