from .signal_store import SignalStore, JsonSignalStore

__all__ = ['SignalStore', 'JsonSignalStore']
