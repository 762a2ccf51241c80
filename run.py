#!/usr/bin/env python3
"""
Launcher for the Compass Heading System

Modes:
    python run.py                      synthetic source, console display
    python run.py dashboard            synthetic source, OpenCV dashboard
    python run.py replay <file.csv>    replay a recording
    python run.py debug                bounded synthetic run with telemetry
"""
import sys
import os

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    from main import main, main_debug

    if len(sys.argv) > 1:
        mode = sys.argv[1].lower()

        if mode == "debug":
            main_debug()
        elif mode == "dashboard":
            main(mode="synthetic", enable_dashboard=True)
        elif mode == "replay":
            if len(sys.argv) < 3:
                print("Usage: python run.py replay <file.csv> [--dashboard]")
                sys.exit(1)
            main(mode="replay", replay_path=sys.argv[2], enable_dashboard="--dashboard" in sys.argv[3:])
        elif mode == "synthetic":
            main(mode="synthetic")
        else:
            print(f"Unknown mode '{mode}'")
            print("Available modes: synthetic, dashboard, replay <file.csv>, debug")
            sys.exit(1)
    else:
        main()
