"""
Binding parsed arguments to a command and running it.

bind(command, arguments)
- Walks the command's parameters in declaration order.
- The first argument with the parameter's exact name supplies the value; later duplicates are ignored.
- A missing parameter falls back to its default; without one, MissingRequiredArgumentError.
- Values (and defaults) go through the parameter's Kind; failures raise TypeConversionError.
- A None default is passed through unconverted.
- Arguments matching no parameter are ignored.

invoke(command, arguments, sink, **options)
- Never raises a binding fault: it reports the fault through the sink and hands back a
  future that is already done.
- Asynchronous commands return their coroutine as the completion handle.
- Synchronous commands run on a worker thread; the handle is the task wrapping it. An
  awaitable returned from the thread is awaited on the loop before the task completes.
"""
import asyncio
import inspect
import logging
from types import MappingProxyType

from .commands import Binding
from .faults import *
from .utils import Unset

logger = logging.getLogger(__name__)


def _convert(parameter, value, origin):
    try:
        return parameter.kind.convert(value)
    except (TypeError, ValueError, OverflowError):
        raise TypeConversionError(
            "failed to convert %s -%s with value %r to %s" % (origin, parameter.name, value, parameter.kind.value),
            title="type conversion failure",
            code=FaultCode.CONVERSION_FAILURE,
            hint="pass a value of type %s for -%s" % (parameter.kind.value, parameter.name),
            parameter=parameter,
            value=value,
            docs=getdoc(FaultCode.CONVERSION_FAILURE),
        ) from None


def bind(command, arguments, /):
    """
    Match Arguments against the command's parameters and coerce them.

    Returns a Binding; raises MissingRequiredArgumentError or TypeConversionError.
    """
    supplied = {}
    for name, value in arguments:
        supplied.setdefault(name, value)

    positional = []
    keywords = {}
    for parameter in command.parameters:
        value = supplied.get(parameter.name, Unset)
        if value is not Unset:
            value = _convert(parameter, value, "argument")
        elif not parameter.has_default:
            raise MissingRequiredArgumentError(
                "missing argument -%s for command %r" % (parameter.name, command.name),
                title="missing argument",
                code=FaultCode.MISSING_ARGUMENT,
                hint="add -%s <%s> to the command line" % (parameter.name, parameter.kind.value),
                parameter=parameter,
                docs=getdoc(FaultCode.MISSING_ARGUMENT),
            )
        elif parameter.default is not None:
            value = _convert(parameter, parameter.default, "default of")
        else:
            value = None

        if parameter.keyword:
            keywords[parameter.name] = value
        else:
            positional.append(value)

    return Binding(command, tuple(positional), MappingProxyType(keywords))


async def _offload(binding):
    result = await asyncio.to_thread(binding)
    if inspect.isawaitable(result):
        logger.debug("command %r returned an awaitable from its worker thread", binding.command.name)
        result = await result
    return result


def _completed():
    future = asyncio.get_running_loop().create_future()
    future.set_result(None)
    return future


def invoke(command, arguments, sink, /, **options):
    """
    Bind and start a command, returning its completion handle.

    Must be called while an event loop is running. Faults are reported with
    trigger(fault, sink=sink, **options).
    """
    try:
        binding = bind(command, arguments)
    except CommandException as fault:
        logger.debug("binding %r failed: %s", command.name, fault.message)
        trigger(fault, sink=sink, **options)
        return _completed()

    logger.debug("invoking %r with %r", command.name, dict(binding.values))
    if command.asynchronous:
        return binding()
    return asyncio.ensure_future(_offload(binding))


__all__ = (
    "bind",
    "invoke",
)
