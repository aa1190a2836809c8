#!/usr/bin/python
"""This is a terminal version of Wordle. A random answer word is picked from a word list,
and the player gets a fixed number of attempts to guess it. Each guess is coloured letter
by letter, and a keyboard underneath the prompt shows what has been learned about each letter."""

import enum  # Used for the closed sets of verdicts, letter states and input outcomes
import random  # Used to pick the answer word for each round
import sys
from types import MappingProxyType  # Used to hand out read-only views of the letter states
from typing import Callable, Iterator, Mapping, Optional, Self, Sequence, TextIO

import colorama  # Used to colour the output and to move the cursor around the terminal
from colorama import Cursor, Fore, Style
from colorama.ansi import clear_line

Letter = str

ANSWERS_FILENAME = "wordle-La.txt"  # Words that can be picked as the answer
GUESSES_FILENAME = "wordle-Ta.txt"  # Extra words that are accepted as guesses, but never picked

MAX_GUESSES = 6
QUIT_COMMAND = "q"
REPLAY_COMMAND = "y"

ERROR_COLUMN = 15  # Input errors are drawn from this column of the prompt line onwards
KEYBOARD_ROWS = ("qwertyuiop", "asdfghjkl", "zxcvbnm")
ALPHABET = tuple(chr(letter_int) for letter_int in range(ord("a"), ord("z") + 1))


class Verdict(enum.Enum):
    """The result for a single letter of a guess."""
    EXACT = "exact"  # Right letter, right position
    PART = "part"  # Right letter, wrong position
    NONE = "none"  # Letter is not in the answer at all


class LetterState(enum.Enum):
    """What the player has learned about a letter of the alphabet during a round."""
    UNKNOWN = "unknown"
    PRESENT = "present"
    ABSENT = "absent"


class InputType(enum.Enum):
    """The outcome of checking a line typed in by the player."""
    OK = "ok"
    ERROR = "error"
    EXIT = "exit"


GUESS_COLOURS = {
    Verdict.EXACT: Fore.GREEN,
    Verdict.PART: Fore.YELLOW,
    Verdict.NONE: Fore.LIGHTBLACK_EX,
}

KEYBOARD_COLOURS = {
    LetterState.UNKNOWN: Fore.WHITE,
    LetterState.PRESENT: Fore.YELLOW,
    LetterState.ABSENT: Fore.LIGHTBLACK_EX,
}


def normalize_input(line: str) -> str:
    """Lowercase a line of input and strip the whitespace around it."""
    return line.lower().strip()


class WordList:
    """A WordList is an ordered list of lowercase words.

    Membership checks go through a set that's built alongside the list,
    so `word in word_list` is O(1) even for the full guess dictionary."""

    _words: list[str]
    _lookup: set[str]

    def __init__(self, words: Sequence[str]) -> None:
        self._words = list(words)
        self._lookup = set(self._words)

    def __str__(self) -> str:
        return f"WordList containing {len(self)} words"

    def __repr__(self) -> str:
        return (
            f"<wordle.WordList at {hex(id(self))}: "
            f"_words: {self._words}"
            f">"
        )

    def __bool__(self) -> bool:
        return self._words != []

    def __contains__(self, word: str) -> bool:
        return word in self._lookup

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        yield from self._words

    def __getitem__(self, index: int) -> str:
        return self._words[index]

    def __add__(self, other: Self) -> Self:
        """Using dict.fromkeys preserves the insert order of the combined list,
        while removing duplicates."""
        return WordList(list(dict.fromkeys(self._words + other._words)))

    @classmethod
    def from_file(cls, filename: str) -> Self:
        """This sets up a WordList by reading words from a text file, one per line.
        Line endings (including Windows-style carriage returns) and blank lines are dropped."""
        try:
            with open(filename, "r", encoding = "utf-8") as infile:
                return cls([normalize_input(line) for line in infile if line.strip()])
        except UnicodeDecodeError as ex:
            raise ValueError(f"Failed to read {filename}, it isn't valid UTF-8 text") from ex

    def pick_random(self, rng: Optional[random.Random] = None) -> str:
        """Pick a word uniformly at random."""
        if not self._words:
            raise ValueError("Can't pick a word from an empty WordList!")

        rng = rng if rng is not None else random.Random()
        return self._words[rng.randrange(len(self._words))]


def calculate_guess_results(guess: str, answer: str) -> list[Verdict]:
    """This compares a guess against the answer and returns one Verdict per position.

    Each position is judged on its own: a letter gets EXACT if it matches the answer
    at that position, PART if it appears anywhere else in the answer, and NONE otherwise.

    Note that repeated letters are NOT rationed against the answer. If the answer is
    "abide" and the guess is "eerie", both leading "e"s get PART, even though the
    answer only has a single "e"."""

    if len(guess) != len(answer):
        raise ValueError(
            f"The guess and the answer must be the same length, "
            f"but got {len(guess)} and {len(answer)}!"
        )

    answer_letters = set(answer)
    results = []

    for guess_letter, answer_letter in zip(guess, answer):
        if guess_letter == answer_letter:
            results.append(Verdict.EXACT)
        elif guess_letter in answer_letters:
            results.append(Verdict.PART)
        else:
            results.append(Verdict.NONE)

    return results


class LetterTracker:
    """A LetterTracker keeps track of what's known about every letter of the alphabet.

    Letters start out UNKNOWN. The first time a letter shows up in a guess, it becomes
    PRESENT or ABSENT depending on its verdict, and then it stays that way for the rest
    of the round, whatever later guesses say about it."""

    _states: dict[Letter, LetterState]

    def __init__(self) -> None:
        self._states = {}
        self.reset()

    def __repr__(self) -> str:
        known = {letter: state.name for letter, state in self._states.items() if state is not LetterState.UNKNOWN}
        return f"<wordle.LetterTracker at {hex(id(self))}: known: {known}>"

    def __getitem__(self, letter: Letter) -> LetterState:
        return self._states[letter]

    def reset(self) -> None:
        """Forget everything, setting all 26 letters back to UNKNOWN.
        The dict is updated in place so that existing snapshots see the reset."""
        for letter in ALPHABET:
            self._states[letter] = LetterState.UNKNOWN

    def update(self, guess: str, verdicts: Sequence[Verdict]) -> None:
        """Fold the verdicts for a guess into the letter states."""
        for letter, verdict in zip(guess, verdicts):
            if self._states[letter] is not LetterState.UNKNOWN:
                continue

            if verdict is Verdict.NONE:
                self._states[letter] = LetterState.ABSENT
            else:
                self._states[letter] = LetterState.PRESENT

    def snapshot(self) -> Mapping[Letter, LetterState]:
        """A read-only view of the letter states, for drawing the keyboard."""
        return MappingProxyType(self._states)


def check_guess_errors(
    guess: str,
    answer_length: int,
    dictionary: WordList,
) -> tuple[InputType, Optional[str]]:
    """This checks a (normalized) guess and returns an InputType, along with
    an error message to show the player if the guess was rejected."""

    if guess == QUIT_COMMAND:
        return InputType.EXIT, None

    if len(guess) < answer_length:
        return InputType.ERROR, f"Word is too short, must have {answer_length} letters"
    if len(guess) > answer_length:
        return InputType.ERROR, f"Word is too long, must have {answer_length} letters"

    if guess not in dictionary:
        return InputType.ERROR, f"{guess} is not in the dictionary"

    return InputType.OK, None


class GameConfig:
    """The settings that stay the same for every round of a session:
    the word lists and the number of attempts the player gets."""

    answers: WordList
    extra_guesses: WordList
    max_guesses: int

    # Every word the player is allowed to guess; the union of the two lists above.
    dictionary: WordList

    def __init__(
        self,
        answers: WordList,
        extra_guesses: Optional[WordList] = None,
        max_guesses: int = MAX_GUESSES,
    ) -> None:
        if not answers:
            raise ValueError("The answer list must contain at least one word!")
        if max_guesses < 1:
            raise ValueError(f"max_guesses must be at least 1, but got {max_guesses}!")

        self.answers = answers
        self.extra_guesses = extra_guesses if extra_guesses is not None else WordList([])
        self.max_guesses = max_guesses
        self.dictionary = self.answers + self.extra_guesses

    def __repr__(self) -> str:
        return (
            f"<wordle.GameConfig at {hex(id(self))}: "
            f"answers: {self.answers}"
            f", extra_guesses: {self.extra_guesses}"
            f", max_guesses: {self.max_guesses}"
            f">"
        )

    @classmethod
    def from_files(
        cls,
        answers_filename: str = ANSWERS_FILENAME,
        guesses_filename: str = GUESSES_FILENAME,
        max_guesses: int = MAX_GUESSES,
    ) -> Self:
        """This loads both word lists from disk."""
        return cls(
            answers = WordList.from_file(answers_filename),
            extra_guesses = WordList.from_file(guesses_filename),
            max_guesses = max_guesses,
        )


class Round:
    """A Round holds everything that changes while a single game is being played.
    A new Round is made for every game, so nothing carries over between them."""

    config: GameConfig
    answer: str
    tracker: LetterTracker
    guess_num: int  # Guess numbers START AT 1
    won: bool
    lost: bool

    def __init__(self, config: GameConfig, answer: str) -> None:
        self.config = config
        self.answer = answer
        self.tracker = LetterTracker()
        self.guess_num = 1
        self.won = False
        self.lost = False

    def __repr__(self) -> str:
        return (
            f"<wordle.Round at {hex(id(self))}: "
            f"answer: {self.answer}"
            f", guess_num: {self.guess_num}"
            f", won: {self.won}"
            f", lost: {self.lost}"
            f">"
        )

    @classmethod
    def start(cls, config: GameConfig, rng: Optional[random.Random] = None) -> Self:
        """Begin a new round with a freshly picked answer word."""
        return cls(config, config.answers.pick_random(rng))

    @property
    def is_over(self) -> bool:
        return self.won or self.lost

    def check(self, line: str) -> tuple[str, InputType, Optional[str]]:
        """Normalize a line of input and check it against this round's answer."""
        guess = normalize_input(line)
        input_type, message = check_guess_errors(guess, len(self.answer), self.config.dictionary)
        return guess, input_type, message

    def submit(self, guess: str) -> list[Verdict]:
        """Score an accepted guess, update the letter states, and move on to the next guess.
        The guess number only goes up when the guess was wrong and there are attempts left,
        so once the round is over it's still the number of the last guess."""

        if self.is_over:
            raise ValueError(f"This round is already over; can't submit '{guess}'!")

        verdicts = calculate_guess_results(guess, self.answer)
        self.tracker.update(guess, verdicts)

        if guess == self.answer:
            self.won = True
        elif self.guess_num >= self.config.max_guesses:
            self.lost = True
        else:
            self.guess_num += 1

        return verdicts


class Terminal:
    """This draws the game to a text stream using ANSI escape sequences.

    All of the drawing happens around the line the player is typing on: the keyboard
    is drawn a couple of lines below it, and the cursor is then moved back up so
    the next prompt lands in the right place."""

    out: TextIO

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out if out is not None else sys.stdout

    def _write(self, *parts: str) -> None:
        self.out.write("".join(parts))

    def _flush(self) -> None:
        self.out.flush()

    def print_banner(self, max_guesses: int) -> None:
        self._write(f"Wordle - {max_guesses} attempts - type {QUIT_COMMAND} to quit\n")
        self._flush()

    def print_word_length(self, length: int) -> None:
        self._write(f"The word is {length} letters long\n")
        self._flush()

    def print_keyboard(self, letter_states: Mapping[Letter, LetterState]) -> None:
        """Print each row of the keyboard, with each letter coloured by what we know about it."""

        # Rows 2 and 3 are indented to look a bit more like a real keyboard
        self._write("\n", clear_line(), "\n", clear_line())
        for indent, row in enumerate(KEYBOARD_ROWS):
            if indent:
                self._write("\n", clear_line(), " " * indent)
            for letter in row:
                self._write(KEYBOARD_COLOURS[letter_states[letter]], f"{letter} ")

        # Back up to the start of the input line
        self._write(Style.RESET_ALL, Cursor.UP(len(KEYBOARD_ROWS) + 1), "\r")
        self._flush()

    def clear_keyboard(self) -> None:
        """Wipe the keyboard off the screen, leaving the cursor where it was."""
        self._write(*(("\n", clear_line()) * len(KEYBOARD_ROWS)))
        self._write(Cursor.UP(len(KEYBOARD_ROWS)), "\r")
        self._flush()

    def print_guess_num(self, guess_num: int) -> None:
        self._write(f"{guess_num}: ")
        self._flush()

    def print_input_error(self, guess_num: int, message: str) -> None:
        """Replace the line the player just typed with the prompt and a red error message."""
        self._write(
            Cursor.UP(1), "\r", clear_line(),
            f"{guess_num}: ",
            Fore.RED,
            "\r", Cursor.FORWARD(ERROR_COLUMN),
            message,
            Style.RESET_ALL,
            "\r",
        )
        self._flush()

    def print_guess_highlighted(self, guess_num: int, guess: str, verdicts: Sequence[Verdict]) -> None:
        """Replace the line the player just typed with the coloured version of their guess."""
        self._write(Cursor.UP(1), "\r", clear_line(), f"{guess_num}: ")
        for letter, verdict in zip(guess, verdicts):
            self._write(GUESS_COLOURS[verdict], letter, Style.RESET_ALL)
        self._write("\n")
        self._flush()

    def print_result(self, game_round: Round) -> None:
        if game_round.won:
            self._write("Correctly guessed the word\n")
        else:
            self._write(f"Ran out of guesses, the word was {game_round.answer}\n")
        self._flush()

    def ask_replay(self) -> None:
        self._write("Would you like to play again (y/N): ")
        self._flush()


def play(
    config: GameConfig,
    terminal: Terminal,
    read_line: Optional[Callable[[], str]] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """This runs rounds of Wordle until the player quits or doesn't want to play again,
    and returns the exit status. `read_line` is called each time a line of input is needed
    (defaulting to `input`). Running out of input at the replay prompt counts as "no";
    anything else it raises (e.g. EOFError mid-round) is left for the caller to deal with."""

    if read_line is None:
        read_line = input

    terminal.print_banner(config.max_guesses)

    while True:
        game_round = Round.start(config, rng)
        terminal.print_word_length(len(game_round.answer))

        while not game_round.is_over:
            terminal.print_keyboard(game_round.tracker.snapshot())
            terminal.print_guess_num(game_round.guess_num)

            guess, input_type, message = game_round.check(read_line())

            match input_type:
                case InputType.EXIT:
                    terminal.clear_keyboard()
                    return 0
                case InputType.ERROR:
                    terminal.print_input_error(game_round.guess_num, message)
                    continue
                case InputType.OK:
                    pass

            # The guess is redrawn with the number it was made at, so grab it before submitting
            guess_num = game_round.guess_num
            verdicts = game_round.submit(guess)
            terminal.print_guess_highlighted(guess_num, guess, verdicts)

        terminal.clear_keyboard()
        terminal.print_result(game_round)

        terminal.ask_replay()
        try:
            reply = read_line()
        except EOFError:  # End of input declines the replay
            return 0
        if normalize_input(reply) != REPLAY_COMMAND:
            return 0


def main() -> None:
    """Load the word lists from the working directory and play on the real terminal."""
    colorama.just_fix_windows_console()

    try:
        config = GameConfig.from_files()
    except OSError as ex:
        sys.exit(f"Failed to open {ex.filename}")
    except ValueError as ex:
        sys.exit(str(ex))

    try:
        status = play(config, Terminal(), rng = random.Random())
    except (EOFError, UnicodeDecodeError, OSError):
        sys.exit("Failed to read input")

    sys.exit(status)


if __name__ == "__main__":
    main()
