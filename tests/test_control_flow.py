"""Tests for control flow instructions."""

import pytest
from octavm import execute, press_key, StackOverflow, STACK_SIZE


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_call_pushes_return_address(self, fresh_state):
        """2NNN - Push PC, then jump."""
        state = execute(fresh_state, 0x2345)
        assert state.pc == 0x345
        assert state.stack.pointer == 1
        assert state.stack.data[0] == 0x200

    def test_call_overflow(self, fresh_state):
        """2NNN - The seventeenth nested call overflows."""
        state = fresh_state
        for _ in range(STACK_SIZE):
            state = execute(state, 0x2300)
        assert state.stack.pointer == STACK_SIZE

        with pytest.raises(StackOverflow):
            execute(state, 0x2300)


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestKeySkips:
    """Test EX9E/EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip when the key in VX is down."""
        state = fresh_state.replace(V=fresh_state.V.at[2].set(0xB))
        state = press_key(state, 0xB)

        assert execute(state, 0xE29E).pc == state.pc + 2
        assert execute(state, 0xE2A1).pc == state.pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        """EXA1 - Skip when the key in VX is up."""
        state = fresh_state.replace(V=fresh_state.V.at[2].set(0xB))
        state = press_key(state, 0xA)

        assert execute(state, 0xE29E).pc == state.pc
        assert execute(state, 0xE2A1).pc == state.pc + 2

    def test_key_index_uses_low_nibble(self, fresh_state):
        """EX9E - Register values above 0xF select key VX & 0xF."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0x13))
        state = press_key(state, 0x3)

        assert execute(state, 0xE09E).pc == state.pc + 2


class TestJumpWithOffset:
    """Test BNNN."""

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump with V0 offset."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0x6230)  # V2 = 0x30
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260
