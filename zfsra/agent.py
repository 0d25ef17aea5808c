"""
Lifecycle of a ZFS pool managed as a cluster resource

The only state is whether the pool is imported on this node, and it is read
from zpool every time a decision depends on it. Every method returns an OCF
return code; failures are not retried here, the cluster manager decides
when to call again.
"""
from . import constants
from . import log
from .resource import ResourceHandle
from .zpool import HealthStatus, ZpoolDriver
from .reaper import FuserReaper


logger = log.setup_logger(__name__)


class ZpoolAgent(object):
    """
    start/stop/monitor/validate-all for one pool
    """
    def __init__(self, resource: ResourceHandle, driver: ZpoolDriver = None, reaper: FuserReaper = None):
        self.resource = resource
        self.driver = driver or ZpoolDriver()
        self.reaper = reaper or FuserReaper()

    @property
    def pool(self):
        return self.resource.name

    def _pool_missing(self):
        if self.pool:
            return False
        logger.error("Parameter '%s' is required", constants.PARAM_POOL)
        return True

    def start(self):
        if self._pool_missing():
            return constants.OCF_ERR_CONFIGURED
        if self.driver.is_imported(self.pool):
            logger.debug("%s: already imported, nothing to start", self.pool)
            return constants.OCF_SUCCESS
        if not self.driver.import_pool(self.pool, self.resource.import_options):
            return constants.OCF_ERR_GENERIC
        logger.info("%s: imported", self.pool)
        return constants.OCF_SUCCESS

    def stop(self):
        if self._pool_missing():
            return constants.OCF_ERR_CONFIGURED
        if not self.driver.is_imported(self.pool):
            logger.debug("%s: not imported, nothing to stop", self.pool)
            return constants.OCF_SUCCESS
        # there is no force export, so clear the way before the first attempt
        for mountpoint in self.driver.list_mountpoints(self.pool):
            self.reaper.release_handles(mountpoint)
        if not self.driver.export_pool(self.pool, self.resource.export_options):
            return constants.OCF_ERR_GENERIC
        logger.info("%s: exported", self.pool)
        return constants.OCF_SUCCESS

    def monitor(self):
        if self._pool_missing():
            return constants.OCF_ERR_CONFIGURED
        if not self.driver.is_imported(self.pool):
            return constants.OCF_NOT_RUNNING
        status = self.driver.health(self.pool)
        if status is HealthStatus.HEALTHY:
            return constants.OCF_SUCCESS
        if status is HealthStatus.DEGRADED:
            logger.warning("%s: pool is degraded\n%s", self.pool, self.driver.status_detail(self.pool))
            return constants.OCF_SUCCESS
        if status is HealthStatus.FAULTED:
            logger.error("%s: pool is faulted", self.pool)
            return constants.OCF_NOT_RUNNING
        return constants.OCF_ERR_GENERIC

    def validate(self):
        if not self.driver.is_installed():
            logger.error("%s not available, check your installation", self.driver.zpool)
            return constants.OCF_ERR_INSTALLED
        if self._pool_missing():
            return constants.OCF_ERR_CONFIGURED
        if self.driver.is_imported(self.pool):
            return constants.OCF_SUCCESS
        if self.driver.can_import(self.pool, self.resource.import_options):
            return constants.OCF_SUCCESS
        logger.error("%s: pool cannot be imported on this node", self.pool)
        return constants.OCF_ERR_CONFIGURED
