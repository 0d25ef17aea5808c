# Copyright (C) 2026 zfsra developers
# See COPYING for license information.
import os
import sys
import argparse

from . import config
from . import constants
from . import log
from . import metadata
from .agent import ZpoolAgent
from .resource import ResourceHandle


logger = log.setup_logger(__name__)


USAGE = """usage: {prog} [-d] {{start|stop|status|monitor|validate-all|meta-data|usage}}

Expects to have a fully populated OCF RA-compliant environment set.

  {prog} start          Import the pool
  {prog} stop           Kill processes using its datasets, then export the pool
  {prog} status         Same as monitor
  {prog} monitor        Report whether the pool is imported and usable
  {prog} validate-all   Check that zpool is installed and the pool can be imported
  {prog} meta-data      Print the resource agent meta-data
  {prog} usage          Print this help

  -d, --debug           Write debug messages to the per-pool log file
"""

ACTIONS = {
    constants.ACT_START: ZpoolAgent.start,
    constants.ACT_STOP: ZpoolAgent.stop,
    constants.ACT_STATUS: ZpoolAgent.monitor,
    constants.ACT_MONITOR: ZpoolAgent.monitor,
    constants.ACT_VALIDATE: ZpoolAgent.validate,
}


def make_option_parser():
    parser = argparse.ArgumentParser(prog=constants.AGENT_NAME, add_help=False)
    parser.add_argument("-d", "--debug", action="store_true", dest="debug",
                        help="Write debug messages to the per-pool log file")
    parser.add_argument("action", nargs="*")
    return parser


option_parser = make_option_parser()


def usage(stream):
    stream.write(USAGE.format(prog=constants.AGENT_NAME))


def make_agent(resource):
    """Build the agent for one invocation; tests replace this"""
    return ZpoolAgent(resource)


def run(argv=None, environ=None):
    if argv is None:
        argv = sys.argv[1:]
    if environ is None:
        environ = os.environ
    opts, unknown = option_parser.parse_known_args(argv)
    args = opts.action + unknown
    if len(args) != 1:
        usage(sys.stderr)
        return constants.OCF_ERR_ARGS

    action = args[0]
    if action in (constants.ACT_USAGE, constants.ACT_HELP):
        usage(sys.stdout)
        return constants.OCF_SUCCESS
    if action == constants.ACT_METADATA:
        sys.stdout.write(metadata.tostring())
        return constants.OCF_SUCCESS
    handler = ACTIONS.get(action)
    if handler is None:
        usage(sys.stderr)
        return constants.OCF_ERR_UNIMPLEMENTED

    if opts.debug:
        config.core.debug = True
    try:
        resource = ResourceHandle.from_environ(environ)
    except ValueError as e:
        log.setup_logging(debug=config.core.debug)
        logger.error(str(e))
        return constants.OCF_ERR_CONFIGURED
    log.setup_logging(resource.name, config.core.debug)
    logger.debug("%s: %s", resource.name, action)

    agent = make_agent(resource)
    try:
        rc = handler(agent)
    except ValueError as e:
        if config.core.debug:
            logger.debug("%s failed", action, exc_info=e)
        logger.error(str(e))
        return constants.OCF_ERR_GENERIC
    logger.debug("%s: %s returned %d", resource.name, action, rc)
    return rc

# vim:ts=4:sw=4:et:
