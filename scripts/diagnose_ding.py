import argparse
import os
import sys
import time

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import sounddevice as sd

from scrumdinger.sound import build_ding, find_output_device


def _describe_device(info: dict, label: str) -> None:
    print(f"{label}: {info.get('name', '')}")
    print(f"Index: {info.get('index', '')}")
    print(f"Host API: {info.get('hostapi', '')}")
    print(f"Max output channels: {info.get('max_output_channels', 0)}")
    print(f"Default sample rate: {info.get('default_samplerate', '')}")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--device", help="Output device name substring.")
    parser.add_argument("--rate", type=int, default=44100, help="Sample rate.")
    parser.add_argument("--frequency", type=float, default=880.0, help="Tone Hz.")
    parser.add_argument("--duration-ms", type=int, default=250, help="Tone length.")
    parser.add_argument("--volume", type=float, default=0.3, help="0..1.")
    parser.add_argument("--repeat", type=int, default=3, help="Number of dings.")
    args = parser.parse_args()

    index = find_output_device(args.device)
    if args.device and index is None:
        print(f"No output device matches {args.device!r}; using default.")
    info = sd.query_devices(index, "output")
    _describe_device(info, "Output device")

    samples = build_ding(args.rate, args.frequency, args.duration_ms, args.volume)
    peak = int(np.max(np.abs(samples))) if samples.size else 0
    print(f"Samples: {samples.size} | Peak: {peak}")

    for count in range(args.repeat):
        print(f"Ding {count + 1}/{args.repeat}")
        sd.play(samples, samplerate=args.rate, device=index)
        sd.wait()
        time.sleep(0.5)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
