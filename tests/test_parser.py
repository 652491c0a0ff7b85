import unittest

from treebf import (
    Command,
    Loop,
    Opcode,
    ParseError,
    UnmatchedLoopEnd,
    UnmatchedLoopStart,
    parse,
    parse_source,
    scan,
)
from treebf.parser import count_commands, count_loops, format_program, nesting_depth


class ParserTests(unittest.TestCase):
    def test_flat_commands_map_one_to_one(self) -> None:
        program = parse(scan("><+-.,"))
        self.assertEqual(
            program,
            (
                Command.MOVE_RIGHT,
                Command.MOVE_LEFT,
                Command.INCREMENT,
                Command.DECREMENT,
                Command.WRITE,
                Command.READ,
            ),
        )

    def test_empty_sequence(self) -> None:
        self.assertEqual(parse([]), ())

    def test_loop_wraps_its_body(self) -> None:
        program = parse_source("+[>+<-].")
        self.assertEqual(
            program,
            (
                Command.INCREMENT,
                Loop(
                    (
                        Command.MOVE_RIGHT,
                        Command.INCREMENT,
                        Command.MOVE_LEFT,
                        Command.DECREMENT,
                    )
                ),
                Command.WRITE,
            ),
        )

    def test_nested_loops(self) -> None:
        program = parse_source("[+[-[]]>]")
        self.assertEqual(
            program,
            (
                Loop(
                    (
                        Command.INCREMENT,
                        Loop((Command.DECREMENT, Loop(()))),
                        Command.MOVE_RIGHT,
                    )
                ),
            ),
        )

    def test_empty_loop_is_legal(self) -> None:
        self.assertEqual(parse_source("[]"), (Loop(()),))
        self.assertEqual(parse_source("[][]"), (Loop(()), Loop(())))

    def test_command_count_is_preserved(self) -> None:
        for source in ["", "+++", "+[->+<]>.", "[[[.]],[<>]]-", "[][]"]:
            with self.subTest(source=source):
                opcodes = scan(source)
                expected = sum(
                    1
                    for opcode in opcodes
                    if opcode not in (Opcode.LOOP_BEGIN, Opcode.LOOP_END)
                )
                self.assertEqual(count_commands(parse(opcodes)), expected)

    def test_loop_count(self) -> None:
        self.assertEqual(count_loops(parse_source("[[][[]]]+[]")), 5)

    def test_unmatched_loop_end_alone(self) -> None:
        with self.assertRaises(UnmatchedLoopEnd) as ctx:
            parse_source("]")
        self.assertEqual(ctx.exception.position, 0)

    def test_unmatched_loop_start_alone(self) -> None:
        with self.assertRaises(UnmatchedLoopStart) as ctx:
            parse_source("[")
        self.assertEqual(ctx.exception.position, 0)

    def test_unmatched_loop_end_after_balanced_loop(self) -> None:
        with self.assertRaises(UnmatchedLoopEnd) as ctx:
            parse_source("+[-]]")
        self.assertEqual(ctx.exception.position, 4)

    def test_unmatched_end_reported_before_later_start(self) -> None:
        with self.assertRaises(UnmatchedLoopEnd) as ctx:
            parse_source("][")
        self.assertEqual(ctx.exception.position, 0)

    def test_unclosed_start_reports_outermost_open_loop(self) -> None:
        with self.assertRaises(UnmatchedLoopStart) as ctx:
            parse_source("+[[]")
        self.assertEqual(ctx.exception.position, 1)

        with self.assertRaises(UnmatchedLoopStart) as ctx:
            parse_source("[][+[")
        self.assertEqual(ctx.exception.position, 2)

    def test_positions_count_opcodes_not_characters(self) -> None:
        with self.assertRaises(UnmatchedLoopEnd) as ctx:
            parse_source("comment + ]")
        self.assertEqual(ctx.exception.position, 1)

    def test_structural_errors_share_a_base(self) -> None:
        for source in ["]", "["]:
            with self.subTest(source=source):
                with self.assertRaises(ParseError):
                    parse_source(source)

    def test_error_message_mentions_position(self) -> None:
        with self.assertRaises(UnmatchedLoopEnd) as ctx:
            parse_source("++]")
        self.assertIn("#2", str(ctx.exception))

    def test_deep_nesting_does_not_exhaust_the_stack(self) -> None:
        depth = 5000
        program = parse_source("[" * depth + "+" + "]" * depth)
        self.assertEqual(count_loops(program), depth)
        self.assertEqual(count_commands(program), 1)
        self.assertEqual(nesting_depth(program), depth)
        self.assertEqual(format_program(program), "[" * depth + "+" + "]" * depth)

    def test_nesting_depth(self) -> None:
        self.assertEqual(nesting_depth(parse_source("+-.")), 0)
        self.assertEqual(nesting_depth(parse_source("[][[]]")), 2)
        self.assertEqual(nesting_depth(parse_source("[[[.]],[<>]]-")), 3)

    def test_format_program_drops_comments(self) -> None:
        program = parse_source("copy +[ move >+< back -] print .")
        self.assertEqual(format_program(program), "+[>+<-].")
        self.assertEqual(format_program(parse_source("[][[]]")), "[][[]]")
        self.assertEqual(format_program(()), "")

    def test_loops_are_immutable(self) -> None:
        loop = parse_source("[-]")[0]
        self.assertIsInstance(loop.body, tuple)
        with self.assertRaises(AttributeError):
            loop.body = ()  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
