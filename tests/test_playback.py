"""
Tests for the playback state machine.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from head_viewer.core.playback import PlaybackController
from head_viewer.core.state import PlaybackState


class TestPlaybackState(unittest.TestCase):

    def test_state_initialization(self):
        state = PlaybackState()
        self.assertEqual(state.current_time, 0)
        self.assertFalse(state.is_playing)
        self.assertEqual(state.change_timer, 0.0)


class TestStepping(unittest.TestCase):

    def setUp(self):
        self.playback = PlaybackController(n_times=3)
        self.seen = []
        self.playback.add_listener(self.seen.append)

    def test_step_forward_wraps_to_zero(self):
        self.playback.set_time(2)
        self.playback.step_forward()
        self.assertEqual(self.playback.current_time, 0)

    def test_step_backward_wraps_to_last(self):
        self.playback.step_backward()
        self.assertEqual(self.playback.current_time, 2)

    def test_forward_then_backward_is_identity(self):
        for start in range(3):
            self.playback.set_time(start)
            self.playback.step_forward()
            self.playback.step_backward()
            self.assertEqual(self.playback.current_time, start)

    def test_every_change_notifies_listeners(self):
        self.playback.step_forward()
        self.playback.step_forward()
        self.playback.step_forward()
        self.assertEqual(self.seen, [1, 2, 0])

    def test_set_time_out_of_range_fails(self):
        with self.assertRaises(IndexError):
            self.playback.set_time(3)
        with self.assertRaises(IndexError):
            self.playback.set_time(-1)
        self.assertEqual(self.seen, [])

    def test_single_timestep_wraps_onto_itself(self):
        playback = PlaybackController(n_times=1)
        playback.step_forward()
        self.assertEqual(playback.current_time, 0)
        playback.step_backward()
        self.assertEqual(playback.current_time, 0)

    def test_zero_timesteps_rejected(self):
        with self.assertRaises(ValueError):
            PlaybackController(n_times=0)


class TestAutoPlay(unittest.TestCase):

    def setUp(self):
        self.playback = PlaybackController(n_times=3, advance_interval=0.25)
        self.seen = []
        self.playback.add_listener(self.seen.append)

    def test_starts_paused(self):
        self.assertFalse(self.playback.is_playing)

    def test_tick_while_paused_does_nothing(self):
        self.playback.tick(10.0)
        self.assertEqual(self.playback.current_time, 0)
        self.assertEqual(self.playback.state.change_timer, 0.0)

    def test_one_second_advances_four_times(self):
        self.playback.play()
        for _ in range(8):
            self.playback.tick(0.125)
        self.assertEqual(len(self.seen), 4)
        # 4 steps through 3 timesteps wraps once
        self.assertEqual(self.seen, [1, 2, 0, 1])

    def test_quarter_second_frames_advance_every_frame(self):
        self.playback.play()
        for _ in range(4):
            self.playback.tick(0.25)
        self.assertEqual(len(self.seen), 4)

    def test_accumulator_resets_after_advance(self):
        self.playback.play()
        self.playback.tick(0.4)
        self.assertEqual(self.playback.current_time, 1)
        self.assertEqual(self.playback.state.change_timer, 0.0)
        self.playback.tick(0.2)
        self.assertEqual(self.playback.current_time, 1)

    def test_play_resets_accumulator(self):
        self.playback.play()
        self.playback.tick(0.2)
        self.playback.play()
        self.playback.tick(0.1)
        self.assertEqual(self.playback.current_time, 0)

    def test_pause_is_idempotent_and_stops_advancing(self):
        self.playback.play()
        self.playback.pause()
        self.playback.pause()
        self.assertFalse(self.playback.is_playing)
        self.playback.tick(1.0)
        self.assertEqual(self.seen, [])

    def test_toggle(self):
        self.playback.toggle()
        self.assertTrue(self.playback.is_playing)
        self.playback.toggle()
        self.assertFalse(self.playback.is_playing)


if __name__ == "__main__":
    unittest.main(verbosity=2)
