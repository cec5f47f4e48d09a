# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Reference table of traditional Dunhuang mural pigments.

Used as an offline naming provider: each palette color is given the name of
the nearest reference pigment (squared RGB distance). This is a coarse
lookup, not a pigment identification.
"""

from __future__ import annotations

from typing import Sequence

from mogao.schema import PigmentName
from mogao.measure.colorspace import hex_to_rgb


DUNHUANG_PIGMENTS: tuple[PigmentName, ...] = (
    PigmentName(
        hex="#A84C32", name="朱砂", en_name="Cinnabar", pinyin="zhū shā",
        description="取自天然辰砂，色泽千年不褪，是敦煌最核心的红色。",
    ),
    PigmentName(
        hex="#4B5E52", name="石绿", en_name="Malachite", pinyin="shí lǜ",
        description="由孔雀石研磨而成，呈现深邃而富有生机的青绿色。",
    ),
    PigmentName(
        hex="#2E4E7E", name="石青", en_name="Azurite", pinyin="shí qīng",
        description="蓝铜矿制成，常用于表现佛陀发色或深邃的天空。",
    ),
    PigmentName(
        hex="#D8C29D", name="土黄", en_name="Ochre Yellow", pinyin="tǔ huáng",
        description="莫高窟周边黄土的色彩，是大地的底色，最常见的背景色。",
    ),
    PigmentName(
        hex="#8C7B6C", name="赭石", en_name="Red Ochre", pinyin="zhě shí",
        description="含铁矿物，古朴稳重，常用于勾勒山石轮廓。",
    ),
    PigmentName(
        hex="#3E3832", name="墨黑", en_name="Ink Black", pinyin="mò hēi",
        description="传统的烟墨，用于线条的勾勒与点睛，赋予画面筋骨。",
    ),
    PigmentName(
        hex="#F2E8D5", name="蛤白", en_name="Clam White", pinyin="gé bái",
        description="贝壳研磨出的细腻白色，色感温润，用于高光或留白。",
    ),
    PigmentName(
        hex="#E5D5C0", name="铅丹", en_name="Minium", pinyin="qiān dān",
        description="鲜艳的橘红色，历经氧化会变为深褐或黑色，是岁月的痕迹。",
    ),
    PigmentName(
        hex="#9D2933", name="胭脂", en_name="Rouge", pinyin="yān zhī",
        description="植物提取出的娇艳红色，多用于仕女面部的晕染。",
    ),
    PigmentName(
        hex="#E9A34C", name="雄黄", en_name="Realgar", pinyin="xióng huáng",
        description="明快的橘黄色，为壁画增添了一抹暖阳般的亮度。",
    ),
)


def nearest_pigment(
    hex_color: str,
    pigments: Sequence[PigmentName] = DUNHUANG_PIGMENTS,
) -> PigmentName:
    """
    Find the reference pigment closest to a color.

    Distance is squared Euclidean in RGB; ties go to the earlier entry.

    Raises:
        ValueError: If hex_color is malformed or pigments is empty.
    """
    if not pigments:
        raise ValueError("Pigment table is empty")

    r, g, b = hex_to_rgb(hex_color)
    best = pigments[0]
    best_dist = None
    for pigment in pigments:
        pr, pg, pb = hex_to_rgb(pigment.hex)
        dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if best_dist is None or dist < best_dist:
            best, best_dist = pigment, dist
    return best


class PigmentTableProvider:
    """
    Offline naming provider backed by a pigment reference table.

    Every requested hex is named after its nearest pigment. The returned
    records carry the requested hex so they match back to the palette.
    """

    def __init__(self, pigments: Sequence[PigmentName] = DUNHUANG_PIGMENTS):
        if not pigments:
            raise ValueError("Pigment table is empty")
        self.pigments = tuple(pigments)

    def name_colors(self, hexes: Sequence[str]) -> list[PigmentName]:
        records = []
        for hex_color in hexes:
            match = nearest_pigment(hex_color, self.pigments)
            records.append(PigmentName(
                hex=hex_color,
                name=match.name,
                en_name=match.en_name,
                pinyin=match.pinyin,
                description=match.description,
            ))
        return records
