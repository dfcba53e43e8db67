import pytest

from picolab.music import OCTAVE, Note


def test_concert_pitch():
    assert Note.A4.frequency() == 440
    assert Note(440) is Note.A4


def test_lookup_by_name():
    assert Note["CS4"].frequency() == 277
    assert Note["DS8"].frequency() == 4978


def test_unknown_frequency_rejected():
    with pytest.raises(ValueError):
        Note(441)


def test_frequencies_strictly_increase():
    freqs = [Note(note.value).frequency() for note in Note]
    assert freqs == sorted(freqs)
    assert len(set(freqs)) == len(freqs)
    assert Note(31).frequency() == freqs[0]
    assert Note(4978).frequency() == freqs[-1]


def test_octave_doubles_frequency():
    assert abs(Note.A5.frequency() - 2 * Note.A4.frequency()) <= 1
    assert abs(Note.C5.frequency() - 2 * Note.C4.frequency()) <= 1


def test_octave_tune():
    assert len(OCTAVE) == 8
    assert OCTAVE[0] == (Note(262), 4)
    assert OCTAVE[-1] == (Note(523), 4)
    assert all(length == 4 for _, length in OCTAVE)
    freqs = [note.frequency() for note, _ in OCTAVE]
    assert freqs == sorted(freqs)
    assert freqs == [262, 294, 330, 349, 392, 440, 494, 523]