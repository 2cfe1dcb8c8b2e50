'''
Path
----
Whole-path bookkeeping on top of the per-segment machinery in curve.
 - path.commands: the move/line/quad/cubic/close drawing-command vocabulary.
 - path.index: validate a command stream and turn it into an array of segments.
 - path.lengths: segment lengths, cumulative lengths, and cached sublength splines.
 - path.distance: arc length between path parameters, and its inverse.
 - path.location: map a path parameter to a segment and a local parameter.
 - path.spline_path: the SplinePath class tying all of the above together.
 '''
