#!/usr/bin/python
# -*- coding: UTF-8 -*-

MINUTIA_TYPE = {
    0: "Other",
    1: "Ridge Ending",
    2: "Bifurcation",
    3: "Unknown",
}

FINGER_POSITION_CODE = {
    0: "unknown finger",
    1: "right thumb",
    2: "right index",
    3: "right middle",
    4: "right ring",
    5: "right little",
    6: "left thumb",
    7: "left index",
    8: "left middle",
    9: "left ring",
    10: "left little",
}

IMPRESSION_TYPE_CODE = {
    0: "live-scan plain",
    1: "live-scan rolled",
    2: "nonlive-scan plain",
    3: "nonlive-scan rolled",
    8: "swipe",
}

EXTENDED_DATA_TYPE = {
    1: "ridge count data",
    2: "core and delta data",
}
