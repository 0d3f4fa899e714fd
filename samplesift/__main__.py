"""Allow running SampleSift with ``python -m samplesift``."""

from samplesift import main

if __name__ == "__main__":
    main()
