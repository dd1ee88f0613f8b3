from __future__ import annotations
import threading
import time
from collections import defaultdict
from typing import Dict, Iterable, Optional, Tuple

LabelKey = Tuple[Tuple[str, str], ...]


def _label_key(labels: Optional[Dict[str, str]]) -> LabelKey:
    return tuple(sorted((labels or {}).items()))


def _label_str(key: LabelKey) -> str:
    return ",".join(f'{k}="{v}"' for k, v in key)


# ---------- Primitives ----------

class _Counter:
    def __init__(self, name: str, help_: str = ""):
        self.name = name
        self.help = help_
        self._lock = threading.Lock()
        self._values: Dict[LabelKey, int] = defaultdict(int)

    def inc(self, labels: Optional[Dict[str, str]] = None, by: int = 1) -> None:
        key = _label_key(labels)
        with self._lock:
            self._values[key] += by

    def value(self, labels: Optional[Dict[str, str]] = None) -> int:
        with self._lock:
            return self._values.get(_label_key(labels), 0)

    def render(self) -> Iterable[str]:
        if self.help:
            yield f"# HELP {self.name} {self.help}\n# TYPE {self.name} counter\n"
        with self._lock:
            items = sorted(self._values.items())
        for key, v in items:
            if key:
                yield f"{self.name}{{{_label_str(key)}}} {v}\n"
            else:
                yield f"{self.name} {v}\n"


class _Gauge:
    def __init__(self, name: str, help_: str = ""):
        self.name = name
        self.help = help_
        self._lock = threading.Lock()
        self._values: Dict[LabelKey, float] = defaultdict(float)

    def set(self, value: float, labels: Optional[Dict[str, str]] = None) -> None:
        key = _label_key(labels)
        with self._lock:
            self._values[key] = value

    def value(self, labels: Optional[Dict[str, str]] = None) -> float:
        with self._lock:
            return self._values.get(_label_key(labels), 0.0)

    def render(self) -> Iterable[str]:
        if self.help:
            yield f"# HELP {self.name} {self.help}\n# TYPE {self.name} gauge\n"
        with self._lock:
            items = sorted(self._values.items())
        for key, v in items:
            if key:
                yield f"{self.name}{{{_label_str(key)}}} {v}\n"
            else:
                yield f"{self.name} {v}\n"


class _Histogram:
    # request handling is in-memory, so buckets are sub-second
    DEFAULT_BUCKETS = [0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1]

    def __init__(self, name: str, help_: str = "", buckets: Optional[Iterable[float]] = None):
        self.name = name
        self.help = help_
        self._lock = threading.Lock()
        self._buckets = list(buckets or self.DEFAULT_BUCKETS)
        self._counts: Dict[LabelKey, Dict[float, float]] = defaultdict(lambda: defaultdict(float))
        self._sum: Dict[LabelKey, float] = defaultdict(float)
        self._obs: Dict[LabelKey, float] = defaultdict(float)

    def observe(self, value_seconds: float, labels: Optional[Dict[str, str]] = None) -> None:
        key = _label_key(labels)
        with self._lock:
            self._sum[key] += value_seconds
            self._obs[key] += 1
            for b in self._buckets:
                if value_seconds <= b + 1e-12:
                    self._counts[key][b] += 1
                    break
            else:  # +Inf
                self._counts[key][float("inf")] += 1

    def timer(self, labels: Optional[Dict[str, str]] = None):
        start = time.perf_counter()

        def _stop():
            self.observe(time.perf_counter() - start, labels=labels)

        return _stop

    def render(self) -> Iterable[str]:
        if self.help:
            yield f"# HELP {self.name} {self.help}\n# TYPE {self.name} histogram\n"
        with self._lock:
            keys = sorted(set(self._obs.keys()))
            snapshot = {k: (dict(self._counts.get(k, {})), self._sum[k], self._obs[k]) for k in keys}
        for key in keys:
            counts, sum_, cnt_ = snapshot[key]
            label_str = _label_str(key)
            running = 0.0
            # cumulative buckets
            for b in self._buckets + [float("inf")]:
                running += counts.get(b, 0.0)
                le = "+Inf" if b == float("inf") else f"{b:g}"
                if label_str:
                    yield f'{self.name}_bucket{{{label_str},le="{le}"}} {running}\n'
                else:
                    yield f'{self.name}_bucket{{le="{le}"}} {running}\n'
            if label_str:
                yield f"{self.name}_sum{{{label_str}}} {sum_}\n"
                yield f"{self.name}_count{{{label_str}}} {cnt_}\n"
            else:
                yield f"{self.name}_sum {sum_}\n"
                yield f"{self.name}_count {cnt_}\n"


# ---------- Registry ----------

class MetricsRegistry:
    def __init__(self):
        self._items: list[object] = []

    def counter(self, name: str, help_: str = "") -> _Counter:
        c = _Counter(name, help_)
        self._items.append(c)
        return c

    def gauge(self, name: str, help_: str = "") -> _Gauge:
        g = _Gauge(name, help_)
        self._items.append(g)
        return g

    def histogram(self, name: str, help_: str = "", buckets: Optional[Iterable[float]] = None) -> _Histogram:
        h = _Histogram(name, help_, buckets=buckets)
        self._items.append(h)
        return h

    def render_prometheus(self) -> str:
        out: list[str] = []
        for it in self._items:
            out.extend(it.render())
        return "".join(out)


REGISTRY = MetricsRegistry()

# ---------- App metrics ----------

order_ops = REGISTRY.counter("ordermgt_order_ops_total", "Order operations by op and result")
order_op_duration = REGISTRY.histogram("ordermgt_order_op_duration_seconds", "Order handler duration in seconds")
orders_stored = REGISTRY.gauge("ordermgt_orders_stored", "Number of orders currently held in the store")
