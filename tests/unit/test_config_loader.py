from pathlib import Path

import pytest

from libs.calculator_core import Operation, UnsupportedOperation, load_chain_program

REPO_ROOT = Path(__file__).resolve().parents[2]


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "program.xml"
    path.write_text(body)
    return path


def test_load_sample_program():
    program = load_chain_program(REPO_ROOT / "config" / "programs" / "sample_chain.xml")

    assert program.program_id == "sample_chain"
    assert program.initial_value == 10.0
    assert program.as_pairs() == [(Operation.ADD, 5.0), (Operation.MULTIPLY, 2.0), (Operation.SUBTRACT, 3.0)]
    assert program.metadata.owner == "calculator"


def test_step_tags_are_case_insensitive_and_comments_skipped(tmp_path):
    path = _write(
        tmp_path,
        """<chain id="c" initial="-1.5">
             <steps>
               <!-- first step -->
               <Divide operand="0.5"/>
               <ADD>2</ADD>
             </steps>
           </chain>""",
    )

    program = load_chain_program(path)

    assert program.as_pairs() == [(Operation.DIVIDE, 0.5), (Operation.ADD, 2.0)]
    assert program.metadata.description is None


def test_unknown_step_is_unsupported(tmp_path):
    path = _write(tmp_path, '<chain id="c" initial="1"><steps><power operand="2"/></steps></chain>')

    with pytest.raises(UnsupportedOperation):
        load_chain_program(path)


@pytest.mark.parametrize(
    "body, message",
    [
        ('<chain initial="1"><steps/></chain>', "'id'"),
        ('<chain id="c"><steps/></chain>', "Initial value"),
        ('<chain id="c" initial="ten"><steps/></chain>', "numeric"),
        ('<chain id="c" initial="1"><steps><add/></steps></chain>', "Operand"),
    ],
)
def test_malformed_programs_raise_value_error(tmp_path, body, message):
    with pytest.raises(ValueError, match=message):
        load_chain_program(_write(tmp_path, body))
