import time

from .coordinator import SessionCoordinator


class TickLoop:
    """Fixed-rate background driver for `SessionCoordinator.tick_all`.

    - Runs as a Socket.IO background task so it cooperates with whichever
      async mode the server uses
    - Sleeps to an absolute cadence; if a tick overruns, the schedule is
      re-anchored instead of bursting to catch up
    - An exception from one tick is logged and the loop keeps going
    """

    def __init__(self, socketio, coordinator: SessionCoordinator, logger, heartbeat_sec: int = 0):
        self.socketio = socketio
        self.coordinator = coordinator
        self.logger = logger
        self.interval = coordinator.settings.tick_interval
        self.heartbeat_sec = heartbeat_sec
        self.ticks = 0
        self._running = False
        self._generation = 0
        self._task = None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._generation += 1
        self.logger.info(f"[tick-start] rate={self.coordinator.settings.tick_rate}/s")
        self._task = self.socketio.start_background_task(self._run, self._generation)

    def stop(self) -> None:
        if self._running:
            self.logger.info(f"[tick-stop] ticks={self.ticks}")
        self._running = False

    def run_once(self) -> None:
        try:
            self.coordinator.tick_all()
        except Exception:
            self.logger.exception("[tick-error] tick_all failed")
        self.ticks += 1

    def _run(self, generation: int) -> None:
        # A restarted loop bumps the generation; older tasks exit on their next wake
        next_at = time.monotonic()
        last_beat = next_at
        while self._running and generation == self._generation:
            self.run_once()
            now = time.monotonic()
            if self.heartbeat_sec and now - last_beat >= self.heartbeat_sec:
                last_beat = now
                stats = self.coordinator.stats()
                self.logger.info(
                    f"[tick-heartbeat] rooms={stats['rooms']} playing={stats['playing']} ticks={self.ticks}"
                )
            next_at += self.interval
            delay = next_at - now
            if delay < 0:
                next_at = now
                delay = 0
            self.socketio.sleep(delay)
