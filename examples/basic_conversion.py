#!/usr/bin/env python3
"""
Example: Basic project conversion

Shows how to convert an LMMS project and inspect the result before
writing the MIDI file.
"""

import sys

sys.path.insert(0, "..")

from lmms2midi import ConversionOptions, LmmsReader, LmmsToMidiConverter, LoopStyle


def main():
    project = LmmsReader.read("../tests/fixtures/simple.mmp")

    print(f"Tempo: {project.head.bpm} BPM")
    print(
        f"Time Signature: {project.head.time_signature_numerator}/"
        f"{project.head.time_signature_denominator}"
    )
    print()

    options = ConversionOptions(loop_styles=[LoopStyle.MARKER, LoopStyle.EMIDI_GLOBAL])
    result = LmmsToMidiConverter(options).convert(project)

    # Channel map
    print("Channels:")
    for slot in result.assignment.slots:
        player = slot.track.sf2_player
        print(f"  {slot.channel + 1:2d}: {slot.track.name} ({player.bank}:{player.patch})")
    for track in result.assignment.dropped_instrument + result.assignment.dropped_percussion:
        print(f"  --: {track.name} (dropped)")
    print()

    # Warnings
    print("Warnings:")
    for diagnostic in result.diagnostics:
        print(f"  {diagnostic}")
    if not result.diagnostics:
        print("  none")
    print()

    # First events of the stream
    print("Events:")
    for item in result.scheduled[:12]:
        print(f"  +{item.delta:4d}  {item.to_message()}")

    result.save("simple.mid")
    print()
    print(f"Wrote simple.mid ({result.note_count} notes)")


if __name__ == "__main__":
    main()
