"""The pool this agent instance manages, as configured in the CIB"""
import dataclasses
import os
import shlex
import typing

from . import constants


def _split_args(value: typing.Optional[str]) -> typing.Tuple[str, ...]:
    if not value:
        return ()
    try:
        return tuple(shlex.split(value))
    except ValueError as e:
        raise ValueError("Cannot parse arguments '{}': {}".format(value, e))


@dataclasses.dataclass(frozen=True)
class ResourceHandle:
    name: str
    import_options: typing.Tuple[str, ...] = ()
    export_options: typing.Tuple[str, ...] = ()

    @classmethod
    def from_environ(cls, environ: typing.Optional[typing.Mapping[str, str]] = None) -> 'ResourceHandle':
        """Build the handle from the OCF_RESKEY_* variables set by the cluster manager.

        importargs and exportargs are split like a shell would split them and
        handed to zpool in that order. An unbalanced quote raises ValueError.
        """
        if environ is None:
            environ = os.environ

        def param(name):
            return environ.get(constants.RESKEY_PREFIX + name, '')

        return cls(
            name=param(constants.PARAM_POOL).strip(),
            import_options=_split_args(param(constants.PARAM_IMPORTARGS)),
            export_options=_split_args(param(constants.PARAM_EXPORTARGS)),
        )
