#!/usr/bin/env python
# pnm.py - PNM and PAM codec in pure Python
# Copyright (C) 2006 Johann C. Rocholl <johann@browsershots.org>
#
# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.


"""
PNM codec in pure Python

This is an implementation of the binary PGM (P5) and PPM (P6) formats
and of the PAM (P7) format described at http://netpbm.sourceforge.net/doc/
in pure Python. Only 8 bits per sample (a maximum value of 255) is
supported.

Images can be read from a file, from a bytes-like object in memory or
from a pair of caller-supplied callbacks, and written to a file or to a
callback. Decoded images can be converted to 1 (grey), 2 (grey, alpha),
3 (colour) or 4 (colour, alpha) channels on the fly.

This file can be used in two ways:

1. As a command-line utility to inspect and convert PNM files. Try
   "python pnm.py --help" for usage information.

2. As a module that can be imported and that offers functions to read
   and write PNM files directly from your Python program. For help, try
   the following in your python interpreter:
   >>> import pnm
   >>> help(pnm)
"""


__version__ = '0.1'


import sys, os, logging
from array import array


logger = logging.getLogger(__name__)

# Capacity of the read-ahead and output buffers, in bytes.
BUFFER_CAP = 2048

ERROR_IO = 'io'
ERROR_EOF = 'eof'
ERROR_INVALID_INPUT = 'invalid-input'
ERROR_INVALID_FORMAT = 'invalid-format'
ERROR_UNSUPPORTED_VERSION = 'unsupported-version'
ERROR_UNSUPPORTED_MAX_VALUE = 'unsupported-max-value'
ERROR_NO_MEMORY = 'no-memory'

ERROR_MESSAGES = {
    ERROR_IO: 'input/output error',
    ERROR_EOF: 'unexpected end of data',
    ERROR_INVALID_INPUT: 'invalid argument',
    ERROR_INVALID_FORMAT: 'not a valid PNM image',
    ERROR_UNSUPPORTED_VERSION: 'unsupported PNM version',
    ERROR_UNSUPPORTED_MAX_VALUE: 'only a maximum sample value of 255 '
                                 'is supported',
    ERROR_NO_MEMORY: 'out of memory',
    }

WHITESPACE = b' \t\n\v\f\r'
DIGITS = b'0123456789'

# http://netpbm.sourceforge.net/doc/pam.html#tupletype
# (name, minimum maxval, maximum maxval, depth)
PAM_TUPLE_TYPES = (
    (b'BLACKANDWHITE', 1, 1, 1),
    (b'GRAYSCALE', 2, 65535, 1),
    (b'RGB', 1, 65535, 3),
    (b'BLACKANDWHITE_ALPHA', 1, 1, 2),
    (b'GRAYSCALE_ALPHA', 2, 65535, 2),
    (b'RGB_ALPHA', 1, 65535, 4),
    )


class PNMError(ValueError):
    """
    A PNM operation failed.

    The kind attribute is one of the ERROR_* constants.
    """

    def __init__(self, kind, message=None):
        if message is None:
            message = ERROR_MESSAGES.get(kind, kind)
        ValueError.__init__(self, message)
        self.kind = kind


def pam_tuple_type(channels, max_value=255):
    """
    Return the name of the first PAM tuple type that holds the given
    number of channels with samples up to max_value, or None.
    """
    for name, lowest, highest, depth in PAM_TUPLE_TYPES:
        if depth == channels and lowest <= max_value <= highest:
            return name
    return None


def interleave_planes(planes, pixelcount):
    """
    Interleave color planes, e.g. R + G + B + A = RGBA.

    Return an array of pixels consisting of one byte from each plane
    per pixel, for pixelcount pixels.
    """
    psize = len(planes)
    out = array('B', bytes(pixelcount * psize))
    for i, plane in enumerate(planes):
        out[i::psize] = array('B', plane)
    return out


def relayout_row(row, width, channels, desired_channels):
    """
    Convert a scanline of width pixels with the given number of
    channels into one with desired_channels, as an array of bytes.

    Colour samples are read and written in the order red, blu, gre.
    The grey value of a colour pixel uses the integer weights 77, 150
    and 29 for red, gre and blu.
    """
    if channels == desired_channels:
        return array('B', row)
    red = row[0::channels]
    if channels == 4:
        alpha = row[3::4]
    elif channels == 2:
        alpha = row[1::2]
    else:
        alpha = b'\xff' * width
    if channels < 3:
        blu = gre = grey = red
    else:
        blu = row[1::channels]
        gre = row[2::channels]
        if desired_channels < 3:
            grey = bytes(min((77 * r + 150 * g + 29 * b + 128) >> 8, 255)
                         for r, b, g in zip(red, blu, gre))
    if desired_channels == 1:
        return array('B', grey)
    elif desired_channels == 2:
        return interleave_planes((grey, alpha), width)
    elif desired_channels == 3:
        return interleave_planes((red, blu, gre), width)
    else:
        return interleave_planes((red, blu, gre, alpha), width)


class Backend:
    """
    Common base of the byte sources and sinks; usable as a context
    manager that closes the backend on exit.
    """

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False


class FileSource(Backend):
    """
    Read bytes from a file on disk.
    """

    def __init__(self, path):
        try:
            self.file = open(path, 'rb')
        except OSError as e:
            raise PNMError(ERROR_IO, 'cannot open %s: %s' % (path, e)) from e
        try:
            self.length = os.fstat(self.file.fileno()).st_size
        except OSError as e:
            self.file.close()
            raise PNMError(ERROR_IO, 'cannot stat %s: %s' % (path, e)) from e
        self.position = 0
        logger.debug('opened %s for reading, %d bytes', path, self.length)

    def remaining(self):
        """Number of bytes not yet read from the file."""
        return self.length - self.position

    def pull(self, capacity):
        count = min(self.remaining(), capacity)
        if count <= 0:
            return b''
        try:
            data = self.file.read(count)
        except OSError as e:
            raise PNMError(ERROR_IO, str(e)) from e
        self.position += len(data)
        return data

    def close(self):
        self.file.close()
        logger.debug('closed %s', self.file.name)


class MemorySource(Backend):
    """
    Read bytes from a bytes-like object without copying it.
    """

    def __init__(self, data):
        self.data = memoryview(data).cast('B')
        self.position = 0

    def remaining(self):
        return len(self.data) - self.position

    def pull(self, capacity):
        chunk = self.data[self.position:self.position + capacity]
        self.position += len(chunk)
        return chunk


class CallbackSource(Backend):
    """
    Read bytes from a callback read(context, capacity) that returns a
    (data, error) pair, where error is None or one of the ERROR_*
    constants.

    Empty data without an error means that nothing is available yet,
    and the callback is called again.
    """

    def __init__(self, context, read):
        self.context = context
        self.read = read

    def pull(self, capacity):
        while True:
            data, error = self.read(self.context, capacity)
            if error is not None:
                raise PNMError(error)
            if len(data):
                return data


class FileSink(Backend):
    """
    Write bytes to a file on disk, replacing any existing file.
    """

    def __init__(self, path):
        try:
            self.file = open(path, 'wb')
        except OSError as e:
            raise PNMError(ERROR_IO, 'cannot create %s: %s' % (path, e)) from e
        logger.debug('opened %s for writing', path)

    def push(self, data):
        try:
            self.file.write(data)
        except OSError as e:
            raise PNMError(ERROR_IO, str(e)) from e

    def close(self):
        self.file.close()
        logger.debug('closed %s', self.file.name)


class CallbackSink(Backend):
    """
    Write bytes to a callback write(context, data) that returns None on
    success or one of the ERROR_* constants.
    """

    def __init__(self, context, write):
        self.context = context
        self.write = write

    def push(self, data):
        error = self.write(self.context, data)
        if error is not None:
            raise PNMError(error)


def stream_read(stream, capacity):
    """
    Read callback for a binary file object, e.g. sys.stdin.buffer.
    """
    try:
        data = stream.read(capacity)
    except OSError:
        return b'', ERROR_IO
    if not data:
        return b'', ERROR_EOF
    return data, None


def stream_write(stream, data):
    """
    Write callback for a binary file object, e.g. sys.stdout.buffer.
    """
    try:
        stream.write(data)
    except OSError:
        return ERROR_IO
    return None


class Reader:
    """
    PNM decoder in pure Python.

    The reader pulls bytes from a source through a read-ahead buffer.
    The first error is recorded in the error attribute; from then on
    every method returns at once with 0, None or empty data and the
    source is not used again.
    """

    def __init__(self, source, buffer_cap=BUFFER_CAP):
        """
        Create a PNM decoder object.

        Arguments:
        source - a FileSource, MemorySource or CallbackSource
        buffer_cap - maximum number of bytes pulled from the source at once
        """
        if buffer_cap < 1:
            raise ValueError("Buffer capacity must be at least one byte")
        self.source = source
        self.buffer_cap = buffer_cap
        self.error = None
        self.buffer = b''
        self.buffer_offset = 0
        self.buffer_remaining = 0
        self.pushback = None

    def fail(self, kind):
        """
        Record an error, unless one is recorded already.
        """
        if self.error is None:
            logger.debug('read failed: %s', ERROR_MESSAGES.get(kind, kind))
            self.error = kind
            self.pushback = None

    def fill(self):
        """
        Refill the read-ahead buffer; return False on error.
        """
        try:
            data = self.source.pull(self.buffer_cap)
        except PNMError as e:
            self.fail(e.kind)
            return False
        if not len(data):
            self.fail(ERROR_EOF)
            return False
        self.buffer = data
        self.buffer_offset = 0
        self.buffer_remaining = len(data)
        return True

    def next_byte(self):
        if self.error is not None:
            return 0
        if self.pushback is not None:
            b, self.pushback = self.pushback, None
            return b
        if self.buffer_remaining == 0 and not self.fill():
            return 0
        b = self.buffer[self.buffer_offset]
        self.buffer_offset += 1
        self.buffer_remaining -= 1
        return b

    def peek_byte(self):
        """
        Return the next byte without consuming it.

        Only one byte is ever held back, so peeking again before the
        next read returns the same byte.
        """
        if self.error is not None:
            return 0
        if self.pushback is None:
            b = self.next_byte()
            if self.error is not None:
                return 0
            self.pushback = b
        return self.pushback

    def read_bytes(self, count):
        """
        Read count bytes; fewer are returned after an error.
        """
        data = bytearray()
        if count > 0 and self.pushback is not None and self.error is None:
            data.append(self.next_byte())
        while len(data) < count and self.error is None:
            if self.buffer_remaining == 0 and not self.fill():
                break
            take = min(count - len(data), self.buffer_remaining)
            data += self.buffer[self.buffer_offset:self.buffer_offset + take]
            self.buffer_offset += take
            self.buffer_remaining -= take
        return data

    def skip_whitespace(self):
        while self.peek_byte() in WHITESPACE:
            self.next_byte()

    def parse_uint(self):
        """
        Parse a run of decimal digits; no digits at all gives 0.
        """
        n = 0
        while True:
            b = self.peek_byte()
            if b not in DIGITS:
                return n
            n = n * 10 + b - DIGITS[0]
            self.next_byte()

    def expect_literal(self, text):
        """
        Consume len(text) bytes, which must be equal to text.
        """
        data = bytes(self.next_byte() for _ in range(len(text)))
        if data != text:
            self.fail(ERROR_INVALID_FORMAT)

    def expect_keyword_uint(self, keyword):
        """
        Parse a PAM header line such as "WIDTH 227", return the number.
        """
        self.skip_whitespace()
        self.expect_literal(keyword)
        self.skip_whitespace()
        return self.parse_uint()

    def match_tuple_type(self):
        """
        Parse the TUPLTYPE header line of a PAM file.

        Return the index of the matching entry of PAM_TUPLE_TYPES, or
        None. All names are matched at the same time, one byte after
        the other, and a name only matches when followed by whitespace;
        GRAYSCALE and GRAYSCALE_ALPHA are told apart without going back.
        """
        self.skip_whitespace()
        self.expect_literal(b'TUPLTYPE')
        self.skip_whitespace()
        names = [entry[0] + b' ' for entry in PAM_TUPLE_TYPES]
        matched = [0] * len(names)
        candidates = True
        while candidates and self.error is None:
            b = self.peek_byte()
            if b in WHITESPACE:
                b = ord(' ')
            candidates = False
            for i, name in enumerate(names):
                if matched[i] < 0:
                    continue
                if name[matched[i]] != b:
                    matched[i] = -1
                    continue
                matched[i] += 1
                if matched[i] == len(name):
                    return i
                candidates = True
            self.next_byte()
        return None

    def read_header(self):
        """
        Read a PNM header, return width, height and channels, or None.

        After the header exactly one whitespace byte is consumed, the
        raster starts right after it.
        """
        if self.next_byte() != ord('P'):
            self.fail(ERROR_INVALID_FORMAT)
        version = self.next_byte()
        if self.error is not None:
            return None
        tuple_type = None
        if version in b'56':
            self.skip_whitespace()
            width = self.parse_uint()
            self.skip_whitespace()
            height = self.parse_uint()
            self.skip_whitespace()
            max_value = self.parse_uint()
            if version == ord('5'):
                channels = 1
            else:
                channels = 3
        elif version == ord('7'):
            width = self.expect_keyword_uint(b'WIDTH')
            height = self.expect_keyword_uint(b'HEIGHT')
            channels = self.expect_keyword_uint(b'DEPTH')
            max_value = self.expect_keyword_uint(b'MAXVAL')
            index = self.match_tuple_type()
            if index is None:
                self.fail(ERROR_INVALID_FORMAT)
            else:
                tuple_type = PAM_TUPLE_TYPES[index]
                if tuple_type[3] != channels:
                    self.fail(ERROR_INVALID_FORMAT)
            self.skip_whitespace()
            self.expect_literal(b'ENDHDR')
        else:
            self.fail(ERROR_UNSUPPORTED_VERSION)
            return None
        if max_value != 255:
            self.fail(ERROR_UNSUPPORTED_MAX_VALUE)
        elif tuple_type is not None and \
                not tuple_type[1] <= max_value <= tuple_type[2]:
            self.fail(ERROR_INVALID_FORMAT)
        if self.next_byte() not in WHITESPACE:
            self.fail(ERROR_INVALID_FORMAT)
        if self.error is not None:
            return None
        logger.debug('P%c header: %dx%d, %d channels',
                     version, width, height, channels)
        return width, height, channels

    def info(self):
        """
        Read the header only, return width, height and channels, or None.
        """
        return self.read_header()

    def scanlines(self, width, height, channels):
        """
        Generator for raw scanlines from the raster.
        """
        row_bytes = width * channels
        for y in range(height):
            yield self.read_bytes(row_bytes)

    def relayout(self, width, height, channels, target, desired_channels):
        """
        Read the raster into target, converting every pixel from
        channels to desired_channels samples.
        """
        row_size = width * desired_channels
        offset = 0
        for row in self.scanlines(width, height, channels):
            if self.error is not None:
                return
            target[offset:offset + row_size] = \
                relayout_row(row, width, channels, desired_channels)
            offset += row_size

    def read_raster(self, width, height, channels, desired_channels):
        """
        Read the raster that follows a header, return an array of
        width * height * desired_channels bytes, or None.
        """
        if self.error is not None:
            return None
        if desired_channels not in (1, 2, 3, 4):
            self.fail(ERROR_INVALID_INPUT)
            return None
        try:
            pixels = array('B', [0]) * (width * height * desired_channels)
        except (MemoryError, OverflowError):
            self.fail(ERROR_NO_MEMORY)
            return None
        self.relayout(width, height, channels, pixels, desired_channels)
        if self.error is not None:
            return None
        return pixels

    def decode(self, desired_channels):
        """
        Read a PNM image, return pixels, width, height and channels, or
        None.

        The pixels array holds desired_channels samples per pixel while
        channels is the number of channels stored in the image.
        """
        if desired_channels not in (1, 2, 3, 4):
            self.fail(ERROR_INVALID_INPUT)
            return None
        header = self.read_header()
        if header is None:
            return None
        width, height, channels = header
        pixels = self.read_raster(width, height, channels, desired_channels)
        if pixels is None:
            return None
        return pixels, width, height, channels


class Writer:
    """
    PNM encoder in pure Python.

    The writer collects output in a buffer and pushes it to its sink
    when the buffer is full and on flush. As with the Reader, the
    first error is kept in the error attribute and turns every further
    call into a no-op.
    """

    def __init__(self, sink, buffer_cap=BUFFER_CAP,
                 force_extended_header=False):
        """
        Create a PNM encoder object.

        Arguments:
        sink - a FileSink or CallbackSink
        buffer_cap - number of bytes collected before pushing to the sink
        force_extended_header - write a PAM (P7) header even for grey
                                and RGB images
        """
        if buffer_cap < 1:
            raise ValueError("Buffer capacity must be at least one byte")
        self.sink = sink
        self.buffer_cap = buffer_cap
        self.force_extended_header = force_extended_header
        self.error = None
        self.buffer = bytearray()

    def fail(self, kind):
        if self.error is None:
            logger.debug('write failed: %s', ERROR_MESSAGES.get(kind, kind))
            self.error = kind

    def flush(self):
        if self.error is not None or not self.buffer:
            return
        try:
            self.sink.push(bytes(self.buffer))
        except PNMError as e:
            self.fail(e.kind)
            return
        del self.buffer[:]

    def write_bytes(self, data):
        data = memoryview(data).cast('B')
        offset = 0
        while offset < len(data):
            if len(self.buffer) >= self.buffer_cap:
                self.flush()
            if self.error is not None:
                return
            take = min(self.buffer_cap - len(self.buffer), len(data) - offset)
            self.buffer += data[offset:offset + take]
            offset += take

    def write_uint(self, n):
        self.write_bytes(b'%d' % n)

    def write_literal(self, text):
        if isinstance(text, str):
            text = text.encode('ascii')
        self.write_bytes(text)

    def write_header(self, width, height, channels):
        """
        Write a P5 or P6 header for grey or RGB images, or a P7 header.
        """
        if channels not in (1, 2, 3, 4):
            self.fail(ERROR_INVALID_INPUT)
            return
        if channels in (1, 3) and not self.force_extended_header:
            if channels == 1:
                self.write_literal(b'P5\n')
            else:
                self.write_literal(b'P6\n')
            self.write_uint(width)
            self.write_literal(b' ')
            self.write_uint(height)
            self.write_literal(b'\n255\n')
        else:
            self.write_literal(b'P7\nWIDTH ')
            self.write_uint(width)
            self.write_literal(b'\nHEIGHT ')
            self.write_uint(height)
            self.write_literal(b'\nDEPTH ')
            self.write_uint(channels)
            self.write_literal(b'\nMAXVAL 255\nTUPLTYPE ')
            self.write_literal(pam_tuple_type(channels))
            self.write_literal(b'\nENDHDR\n')
        logger.debug('wrote header: %dx%d, %d channels', width, height,
                     channels)

    def encode(self, width, height, channels, pixels):
        """
        Write a PNM image, return True on success.

        The pixels must already hold the given number of channels per
        pixel; they are written as they are.
        """
        if channels not in (1, 2, 3, 4) or width < 0 or height < 0:
            self.fail(ERROR_INVALID_INPUT)
            return False
        try:
            data = memoryview(pixels).cast('B')
        except TypeError:
            try:
                data = memoryview(bytes(pixels))
            except (TypeError, ValueError):
                self.fail(ERROR_INVALID_INPUT)
                return False
        size = width * height * channels
        if len(data) < size:
            self.fail(ERROR_INVALID_INPUT)
            return False
        self.write_header(width, height, channels)
        self.write_bytes(data[:size])
        self.flush()
        return self.error is None


def _info(reader):
    header = reader.info()
    if header is None:
        raise PNMError(reader.error)
    return header


def _load(reader, desired_channels):
    result = reader.decode(desired_channels)
    if result is None:
        raise PNMError(reader.error)
    return result


def _write(writer, width, height, channels, pixels):
    if not writer.encode(width, height, channels, pixels):
        raise PNMError(writer.error)


def info(path):
    """
    Read the header of a PNM file, return width, height and channels.
    """
    with FileSource(path) as source:
        return _info(Reader(source))


def load(path, desired_channels):
    """
    Read a PNM file, return pixels, width, height and channels.

    The pixels are an array of bytes with desired_channels samples per
    pixel; channels is the number of channels in the file.
    """
    with FileSource(path) as source:
        return _load(Reader(source), desired_channels)


def write(path, width, height, channels, pixels,
          force_extended_header=False):
    """
    Write pixels with the given number of channels to a PNM file.
    """
    with FileSink(path) as sink:
        _write(Writer(sink, force_extended_header=force_extended_header),
               width, height, channels, pixels)


def info_from_memory(data):
    """
    Read the header of a PNM image held in a bytes-like object.
    """
    with MemorySource(data) as source:
        return _info(Reader(source))


def load_from_memory(data, desired_channels):
    """
    Read a PNM image held in a bytes-like object, see load().
    """
    with MemorySource(data) as source:
        return _load(Reader(source), desired_channels)


def info_from_callbacks(context, read):
    """
    Read the header of a PNM image from a read callback.
    """
    with CallbackSource(context, read) as source:
        return _info(Reader(source))


def load_from_callbacks(context, read, desired_channels):
    """
    Read a PNM image from a read callback, see load().
    """
    with CallbackSource(context, read) as source:
        return _load(Reader(source), desired_channels)


def write_to_callbacks(context, write, width, height, channels, pixels,
                       force_extended_header=False):
    """
    Write a PNM image to a write callback, see write().
    """
    with CallbackSink(context, write) as sink:
        _write(Writer(sink, force_extended_header=force_extended_header),
               width, height, channels, pixels)


def _main(argv=None):
    """
    Run the PNM converter with options from the command line.
    """
    # Parse command line arguments
    from optparse import OptionParser
    parser = OptionParser(version='%prog ' + __version__)
    parser.set_usage("%prog [options] [pnmfile]")
    parser.add_option("-i", "--info",
                      default=False, action="store_true",
                      help="print width, height and channels and exit")
    parser.add_option("-c", "--channels",
                      action="store", type="int", metavar="count",
                      help="convert to 1, 2, 3 or 4 channels")
    parser.add_option("-p", "--pam",
                      default=False, action="store_true",
                      help="always write a PAM (P7) header")
    parser.add_option("-b", "--buffer-size",
                      default=BUFFER_CAP, action="store", type="int",
                      metavar="bytes",
                      help="size of the read and write buffers")
    parser.add_option("-v", "--verbose",
                      default=False, action="store_true",
                      help="log debug messages to stderr")
    (options, args) = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format='%(name)s: %(message)s')
    if options.buffer_size < 1:
        parser.error("buffer size must be at least 1")
    if options.channels is not None and options.channels not in (1, 2, 3, 4):
        parser.error("channels must be 1, 2, 3 or 4")

    # Prepare input file
    try:
        if len(args) == 0:
            source = CallbackSource(sys.stdin.buffer, stream_read)
        elif len(args) == 1:
            source = FileSource(args[0])
        else:
            parser.error("more than one input file")

        with source:
            reader = Reader(source, options.buffer_size)
            header = reader.info()
            if header is None:
                raise PNMError(reader.error)
            width, height, channels = header
            if options.info:
                print('%d %d %d' % header)
                return 0
            desired_channels = options.channels or channels
            pixels = reader.read_raster(width, height, channels,
                                        desired_channels)
            if pixels is None:
                raise PNMError(reader.error)

        # Write the converted image to stdout
        outfile = sys.stdout.buffer
        with CallbackSink(outfile, stream_write) as sink:
            writer = Writer(sink, options.buffer_size,
                            force_extended_header=options.pam)
            _write(writer, width, height, desired_channels, pixels)
        outfile.flush()
    except PNMError as e:
        sys.stderr.write('pnm: %s\n' % e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(_main())
