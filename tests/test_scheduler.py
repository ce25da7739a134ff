import unittest
from unittest import mock

from tabgarden.scheduler import AnimationScheduler, CancellationToken, ErrorThrottle
from tests.fakes import FrameQueue, RecordingPainter, make_entity


class SchedulerTests(unittest.TestCase):
    def setUp(self):
        self.frames = FrameQueue()
        self.repaints = 0
        self.scheduler = AnimationScheduler(self.frames, self._repaint)
        self.plants = [make_entity(0, 10, 10, phase=1.0, rate=0.01), make_entity(1, 90, 10, phase=2.0, rate=0.02)]

    def _repaint(self):
        self.repaints += 1

    def test_start_requests_a_single_frame(self):
        self.scheduler.start()
        self.scheduler.start()
        self.assertEqual(len(self.frames.callbacks), 1)
        self.assertTrue(self.scheduler.pending)

    def test_frame_asks_host_to_repaint(self):
        self.scheduler.start()
        self.frames.fire()
        self.assertEqual(self.repaints, 1)
        self.assertFalse(self.scheduler.pending)

    def test_tick_clears_advances_renders_and_reschedules(self):
        self.scheduler.start()
        self.frames.fire()
        painter = RecordingPainter()

        self.assertTrue(self.scheduler.tick(painter, self.plants, 200, 100))

        self.assertEqual(painter.names()[0], "fillRect")
        self.assertAlmostEqual(self.plants[0].phase, 1.01)
        self.assertAlmostEqual(self.plants[1].phase, 2.02)
        self.assertEqual(len(painter.of("drawPath")), 2)
        self.assertEqual(len(self.frames.callbacks), 1)
        self.assertEqual(self.scheduler.frame_count, 1)

    def test_extra_paints_do_not_start_a_second_chain(self):
        self.scheduler.start()
        painter = RecordingPainter()
        self.scheduler.tick(painter, self.plants, 200, 100)
        self.scheduler.tick(painter, self.plants, 200, 100)
        self.assertEqual(len(self.frames.callbacks), 1)

    def test_phase_never_decreases(self):
        self.scheduler.start()
        painter = RecordingPainter()
        last = [p.phase for p in self.plants]
        for _ in range(50):
            self.frames.fire()
            self.scheduler.tick(painter, self.plants, 200, 100)
            now = [p.phase for p in self.plants]
            self.assertTrue(all(b >= a for a, b in zip(last, now)))
            last = now

    def test_cancel_stops_the_cycle(self):
        self.scheduler.start()
        self.scheduler.cancel()

        self.frames.fire()
        self.assertEqual(self.repaints, 0)
        self.assertFalse(self.scheduler.tick(RecordingPainter(), self.plants, 200, 100))
        self.assertEqual(self.plants[0].phase, 1.0)
        self.assertEqual(self.frames.callbacks, [])
        self.assertFalse(self.scheduler.running)

    def test_cancelled_token_blocks_start(self):
        token = CancellationToken()
        token.cancel()
        scheduler = AnimationScheduler(self.frames, self._repaint, token=token)
        scheduler.start()
        self.assertEqual(self.frames.callbacks, [])

    def test_render_errors_are_logged_and_the_cycle_continues(self):
        self.scheduler.start()
        with mock.patch("tabgarden.scheduler.render", side_effect=RuntimeError("boom")) as render:
            with self.assertLogs("tabgarden.scheduler", level="ERROR") as logs:
                self.assertTrue(self.scheduler.tick(RecordingPainter(), self.plants, 200, 100))

        self.assertEqual(render.call_count, 2)
        # Throttled: one report per key.
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(len(self.frames.callbacks), 1)

    def test_disabled_animation_freezes_phase(self):
        scheduler = AnimationScheduler(self.frames, self._repaint, animate=False)
        painter = RecordingPainter()
        scheduler.tick(painter, self.plants, 200, 100)
        self.assertEqual([p.phase for p in self.plants], [1.0, 2.0])
        self.assertEqual(len(painter.of("drawPath")), 2)

    def test_max_visible_caps_drawn_plants(self):
        scheduler = AnimationScheduler(self.frames, self._repaint, max_visible=1)
        painter = RecordingPainter()
        scheduler.tick(painter, self.plants, 200, 100)
        self.assertEqual(len(painter.of("drawPath")), 1)
        self.assertEqual(self.plants[1].phase, 2.0)

    def test_empty_garden_still_clears(self):
        painter = RecordingPainter()
        self.assertTrue(self.scheduler.tick(painter, [], 200, 100))
        self.assertEqual(painter.names(), ["fillRect"])


class ErrorThrottleTests(unittest.TestCase):
    def test_repeats_within_cooldown_are_suppressed(self):
        now = [100.0]
        throttle = ErrorThrottle(cooldown_s=6.0, clock=lambda: now[0])
        self.assertTrue(throttle.should_show("paint"))
        self.assertFalse(throttle.should_show("paint"))
        self.assertTrue(throttle.should_show("resize"))
        now[0] += 6.0
        self.assertTrue(throttle.should_show("paint"))


if __name__ == "__main__":
    unittest.main()
