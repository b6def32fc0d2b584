#!/usr/bin/env python

"""
Usage: benchmark.py [size] [repeat]

Benchmark encoding and decoding over each backend, print timing
results and filesizes.

"""


import sys, os, io, tempfile

import pnm


def test_image(size, channels):
    """
    Make a square test image with a diagonal gradient.
    """
    return bytes((x + y) & 0xff
                 for y in range(size)
                 for x in range(size)
                 for c in range(channels))


def cpu_times(function, repeat):
    """
    Call a function repeat times, return user and system times.
    """
    before = os.times()
    for i in range(repeat):
        function()
    after = os.times()
    return after.user - before.user, after.system - before.system


def read_callback(stream, capacity):
    data = stream.read(capacity)
    if not data:
        return b'', pnm.ERROR_EOF
    return data, None


def benchmark(size, repeat, directory):
    """
    Print timings for every channel count and backend.
    """
    for channels in (1, 2, 3, 4):
        pixels = test_image(size, channels)
        path = os.path.join(directory, 'test%d.pnm' % channels)
        chunks = []

        def write_file():
            pnm.write(path, size, size, channels, pixels)

        def write_callbacks():
            del chunks[:]
            pnm.write_to_callbacks(chunks, lambda c, d: c.append(d),
                                   size, size, channels, pixels)

        def load_file():
            pnm.load(path, 4)

        def load_memory():
            pnm.load_from_memory(b''.join(chunks), 4)

        def load_callbacks():
            pnm.load_from_callbacks(io.BytesIO(b''.join(chunks)),
                                    read_callback, 4)

        for label, function in (('write file', write_file),
                                ('write callbacks', write_callbacks),
                                ('load file', load_file),
                                ('load memory', load_memory),
                                ('load callbacks', load_callbacks)):
            print('%.2f+%.2f' % cpu_times(function, repeat), end=' ')
            print(os.path.getsize(path), end=' ')
            print('%s channels=%d' % (label, channels))


if __name__ == '__main__':
    size = 256
    repeat = 3
    if len(sys.argv) > 1:
        size = int(sys.argv[1])
    if len(sys.argv) > 2:
        repeat = int(sys.argv[2])
    with tempfile.TemporaryDirectory() as directory:
        benchmark(size, repeat, directory)
