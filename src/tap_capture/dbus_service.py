"""D-Bus interface exposing the capture service on the session bus.

Object /org/zay/KeyPressed on name org.zay.KeyPressed implements
org.zay.KeyPressed1 with two methods:

    InitAction(i dur, i keys_len)   arm a capture window
    GetKeySeq() -> s                poll it ('' while incomplete, '#escape'
                                    when cancelled, the taps otherwise)
"""

from dbus_fast import BusType
from dbus_fast import RequestNameReply
from dbus_fast.aio import MessageBus
from dbus_fast.service import ServiceInterface
from dbus_fast.service import method

from common.logging_utils import get_logger

from .capture_service import CaptureService
from .constants import BUS_NAME
from .constants import INTERFACE_NAME
from .constants import OBJECT_PATH
from .models import InvalidWindowError


class KeyPressedInterface(ServiceInterface):
    """org.zay.KeyPressed1 backed by a CaptureService.

    Validation failures of InitAction are logged and have no effect; they are
    not reported as D-Bus errors; consumers detect them by polling GetKeySeq.
    """

    def __init__(self, service: CaptureService) -> None:
        super().__init__(INTERFACE_NAME)
        self.service = service
        self.logger = get_logger('tap_capture.dbus')

    def init_action(self, dur: int, keys_len: int) -> None:
        try:
            self.service.begin(dur, keys_len)
        except InvalidWindowError as e:
            self.logger.warning('InitAction rejected: %s', e)

    def get_key_seq(self) -> str:
        return self.service.drain().to_wire()

    @method(name='InitAction')
    def dbus_init_action(self, dur: 'i', keys_len: 'i'):  # noqa: F821
        self.init_action(dur, keys_len)

    @method(name='GetKeySeq')
    def dbus_get_key_seq(self) -> 's':  # noqa: F821
        return self.get_key_seq()


async def connect_session_bus() -> MessageBus:
    """Open a connection to the session bus."""
    return await MessageBus(bus_type=BusType.SESSION).connect()


async def export_service(bus: MessageBus, service: CaptureService) -> KeyPressedInterface:
    """Export the capture interface and claim the well-known bus name.

    Raises:
        RuntimeError: If another process already owns the bus name
    """
    interface = KeyPressedInterface(service)
    bus.export(OBJECT_PATH, interface)

    reply = await bus.request_name(BUS_NAME)
    if reply not in (RequestNameReply.PRIMARY_OWNER, RequestNameReply.ALREADY_OWNER):
        bus.unexport(OBJECT_PATH, interface)
        raise RuntimeError(f'D-Bus name {BUS_NAME} is already taken ({reply.name})')  # noqa: TRY003

    get_logger('tap_capture.dbus').info('Serving %s at %s on the session bus', INTERFACE_NAME, OBJECT_PATH)
    return interface


class KeyPressedClient:
    """Consumer-side proxy for org.zay.KeyPressed1."""

    def __init__(self, bus: MessageBus) -> None:
        self.bus = bus
        self._interface = None

    async def _get_interface(self):
        if self._interface is None:
            introspection = await self.bus.introspect(BUS_NAME, OBJECT_PATH)
            proxy = self.bus.get_proxy_object(BUS_NAME, OBJECT_PATH, introspection)
            self._interface = proxy.get_interface(INTERFACE_NAME)
        return self._interface

    async def init_action(self, dur: int, keys_len: int) -> None:
        interface = await self._get_interface()
        await interface.call_init_action(dur, keys_len)

    async def get_key_seq(self) -> str:
        interface = await self._get_interface()
        return await interface.call_get_key_seq()
