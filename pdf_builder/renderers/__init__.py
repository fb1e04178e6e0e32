# renderers package
