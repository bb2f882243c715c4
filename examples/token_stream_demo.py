#!/usr/bin/env python3
"""
loopnotes Token Stream Demo
===========================

This script demonstrates how a parser would drive the tokenizer:
1. Pull tokens one at a time with next_token()
2. Look ahead with peek_token() before deciding what to do
3. Report a lexical error with its position

Usage:
    source .venv/bin/activate
    python examples/token_stream_demo.py
"""

import logging

from loopnotes import LexerError, TokenKind, TokenStream, tokenize


SONG = """\
Title :groove
@bpm = 120 // tempo
$verse Loop 4 Times [ ^Am7, ^D9 ] %dorian &ff8800
|x.x. ( :kick + :snare ) 7/8 Forever
"""


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # ==========================================================================
    # 1. Drain the stream
    # ==========================================================================
    print("All tokens:")
    for token in tokenize(SONG, filename="groove.loop"):
        print(f"  {token.line}:{token.column:<3} {token.kind.value:<12} {token.value}")

    # ==========================================================================
    # 2. Lookahead: collect the body of each Loop
    # ==========================================================================
    print("\nLoop bodies:")
    stream = TokenStream(SONG)
    while (token := stream.next_token()) is not None:
        if token.kind is not TokenKind.KEYWORD or token.value != "Loop":
            continue

        count = stream.next_token()
        stream.next_token()  # Times

        body = []
        if stream.peek_token() is not None and stream.peek_token().value == "[":
            stream.next_token()
            while (item := stream.next_token()) is not None and item.value != "]":
                if item.kind is not TokenKind.PUNCTUATION:
                    body.append(item.value)
        print(f"  {count.value} x {body}")

    # ==========================================================================
    # 3. Errors stop the stream
    # ==========================================================================
    print("\nMalformed input:")
    try:
        tokenize("Loop 4//4 Times", filename="broken.loop")
    except LexerError as e:
        print(e)


if __name__ == "__main__":
    main()
