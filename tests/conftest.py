import sys
import types


class _PortAudioError(Exception):
    pass


class _CallbackStop(Exception):
    pass


class _OutputStream:
    def __init__(self, **kwargs):
        raise _PortAudioError("PortAudio library not found")


def _stand_in_sounddevice():
    module = types.ModuleType("sounddevice")
    module.PortAudioError = _PortAudioError
    module.CallbackStop = _CallbackStop
    module.OutputStream = _OutputStream
    return module


# sounddevice refuses to import without the PortAudio shared library; the
# tests only ever use monkeypatched streams.
try:
    import sounddevice  # noqa: F401
except OSError:
    sys.modules["sounddevice"] = _stand_in_sounddevice()
